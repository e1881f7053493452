# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="codevisualizer",
    version="1.0.0",
    description="Analyze GitHub repositories: tech stack inference and file tree graph layout",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["codevisualizer*"]),
    package_data={
        "codevisualizer.interface.locales": ["*.json"],
    },
    include_package_data=True,
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'codevisualizer=codevisualizer.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
