# setup.py
from setuptools import setup, find_packages

setup(
    name='pyzke',
    version='0.1.0',
    description='Composes client-side class code and instantiation config for trees of server-defined widgets.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',

    # Finds the `pyzke` and `pyzke_cli` packages
    packages=find_packages(include=['pyzke', 'pyzke.*', 'pyzke_cli']),

    include_package_data=True,

    # These are the dependencies the engine and its CLI need to run.
    install_requires=[
        'PyYAML',
        'typer',
    ],
    extras_require={
        'test': ['pytest'],
    },

    # Creates an executable script named `pyzke` that calls the `app`
    # object inside `pyzke_cli.main`.
    entry_points={
        'console_scripts': [
            'pyzke = pyzke_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)
