from glob import glob
from setuptools import setup


setup(
    name='calcbot',
    use_scm_version={
        # Source tarballs and plain copies carry no SCM metadata.
        'fallback_version': '0.1.0',
    },
    description='Infix calculator and chat calculator bot',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['calcbot'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.6',
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
