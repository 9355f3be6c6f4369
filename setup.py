import setuptools

setuptools.setup(
    name='touchkit',
    packages=['touchkit'],
    version='0.1.0',
    author='touchkit',
    description='Create files and update their timestamps, like unix touch.',
    long_description=open('README.md', 'r').read(),
    long_description_content_type='text/markdown',
    python_requires='>=3.11',
    install_requires=[
        'colorama',
        'pyperclip',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['touchkit=touchkit.touch:main_cli'],
    },
)
