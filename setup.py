from setuptools import setup, find_packages

setup(
    name='minkwright',
    version='0.1.0',
    license="Apache 2.0",
    description="Minkwright: a Mink style browser driver backed by Playwright with page recovery",
    long_description=open('README.md').read(),  # Ensure the README.md exists and is correct
    long_description_content_type='text/markdown',  # Use 'text/markdown' for Markdown files
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"minkwright": ["configs/*.yaml"]},
    install_requires=[
        "playwright>=1.43",
        "pyyaml>=6.0",
        "python-dotenv>=1.0",
        "click>=8.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'minkwright-probe=minkwright.command.minkwright_probe:run',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
)
