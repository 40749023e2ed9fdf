"""Setup script for the EEG band feature extraction package."""

from setuptools import find_packages, setup

setup(
    name='eeg_band_features',
    packages=find_packages(exclude=['tests', 'tests.*']),
    version='0.1.0',
    description='Segmentation, filtering and frequency-band magnitude features from multi-channel EEG recordings.',
    license='MIT',
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20.0',
        'pandas>=1.3.0',
        'scipy>=1.7.0',
        'mne>=1.0.0',
        'PyWavelets>=1.2.0',
        'click>=8.0.0',
        'joblib>=1.0.0'
    ],
    extras_require={
        'test': ['pytest>=6.0.0'],
        'dev': ['pytest>=6.0.0', 'black>=21.0.0', 'flake8>=4.0.0']
    }
)
