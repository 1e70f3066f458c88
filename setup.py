# setup.py
from setuptools import setup, find_packages

setup(
    name="wgmath",
    version="1.0.0",
    description="float32 Vec3/Mat3/Mat4/Quat kernel for real-time graphics",
    packages=find_packages(include=["wgmath", "wgmath.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
