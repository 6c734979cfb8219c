from setuptools import setup, find_packages

setup(
    name="rwmcmc",
    version="0.1.0",
    description="Random walk Metropolis sampler with chunked HDF5 sample storage",
    packages=find_packages(include=["rwmcmc", "rwmcmc.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scipy",
        "h5py",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
