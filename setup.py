import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="padstack",
    version="0.1.0",
    description="Parametric padstack generation engine",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={'': '.'},
    packages=setuptools.find_packages(include=['padstack', 'padstack.*']),
    python_requires='>=3.10',
    install_requires = [
        'click',
        'pint',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'padstack = padstack.cli:cli',
        ],
    },
)
