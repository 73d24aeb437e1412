from setuptools import setup, find_packages

setup(
    name='sesame-client',
    version='0.1.0',
    description='Sesame HTTP repository protocol client',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(include=["sesame_client", "sesame_client.*"]),
    include_package_data=True,

    license='Apache License 2.0',
    install_requires=[
        "requests>=2.31.0",
        "pydantic>=2.5.0",
        "PyYAML>=6.0",
        "python-dotenv",
        "rdflib>=7.0.0",
        "lxml>=5.0.0",
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.11',
)
