# make sure every file can run on any computers, avoid absolute paths and undownloaded packages

#pip install setuptools first if not installed
from setuptools import setup
import os


# Read requirements
def read_requirements():
    req_file = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(req_file):
        with open(req_file) as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return [
        "pyyaml",
        "numpy",
        "scipy",
        "matplotlib",
    ]

setup(
    name="madgwick_orientation_filter",
    version="0.1.0",
    description="Madgwick gradient-descent AHRS/IMU orientation filter",
    # _internal folders carry no __init__.py, so packages are listed explicitly
    packages=[
        'orientation_filter',
        'orientation_filter._internal',
        'simulation',
        'debug',
    ],
    python_requires=">=3.8",
    install_requires=read_requirements(),
    extras_require={
        'test': ['pytest'],
    },
    data_files=[('config', ['config/filter_params.yaml'])],
)
