# -*- coding: utf-8 -*-

from setuptools import setup, find_packages


with open('README.md') as f:
    readme = f.read()

setup(
    name='hierarchical_fold',
    version='0.1.0',
    description='Hierarchical FRI-style folding of M31 values into QM31',
    long_description=readme,
    long_description_content_type='text/markdown',
    author='',
    author_email='',
    packages=find_packages(exclude=('tests', 'docs')),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
