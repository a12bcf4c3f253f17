#!/usr/bin/env python3
from setuptools import find_packages, setup

setup(
    name='pygambin',
    version='0.1.0',
    author='pygambin developers',
    description='The GamBin species-abundance distribution and its mixtures',
    long_description='',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.9',
    install_requires=[
        'colorlog',
        'numba',
        'numpy',
        'scipy',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    zip_safe=False,
)
