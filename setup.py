from setuptools import setup

DESCRIPTION = 'Lookup keys and dimension names for ' \
              'N-dimensional arrays in Python.'

with open('README.md') as f:
    LONG_DESCRIPTION = f.read()

dependencies = [
    'asciitree',
    'donfig>=0.8',
    'numpy>=1.22',
]

setup(
    name='axiskeys',
    version='0.1.0',
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    setup_requires=[
        'setuptools>=38.6.0',
    ],
    extras_require={
        'pandas': [
            'pandas',
        ],
        'test': [
            'pytest',
            'hypothesis',
            'pandas',
        ],
    },
    python_requires='>=3.9, <4',
    install_requires=dependencies,
    package_dir={'': '.'},
    packages=['axiskeys', 'axiskeys.tests'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Operating System :: Unix',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    license='MIT',
)
