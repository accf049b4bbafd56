import setuptools

with open('README.md') as infile:
    long_description = infile.read()

with open('VERSION') as infile:
    version = infile.read().strip()

setuptools.setup(
    name='rankvote',
    version=version,
    description='Ranked-choice group elections for Python',
    long_description=long_description,
    long_description_content_type='text/markdown; charset=UTF-8',
    python_requires='>=3.8.0',
    packages=setuptools.find_packages(exclude=('tests', 'tests.*')),
    install_requires=[
        'django-environ>=0.10',
        'requests>=2.27',
        'redis>=4.0',
        'SQLAlchemy>=2.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'fakeredis>=2.0',
        ],
    },
    include_package_data=True,
    license='MIT',
    keywords='voting election vote ranked condorcet instant-runoff python',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True
)
