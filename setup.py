"""
Setup script for SlicSeg - minimally interactive slice-propagation segmentation
"""

from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='slicseg',
    version='1.0.0',
    description='Slice-by-slice propagation segmentation of 3D images from sparse scribbles',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=['slicseg', 'slicseg.*']),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Image Processing',
        'Topic :: Scientific/Engineering :: Medical Science Apps.',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.7.0',
        'scikit-image>=0.19.0',
        'scikit-learn>=1.0.0',
        'PyMaxflow>=1.2.13',
        'h5py>=3.6.0',
        'tifffile>=2021.11.2',
        'PyYAML>=6.0',
        'Pillow>=9.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'slicseg=slicseg.__main__:main',
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
