from setuptools import setup, find_packages
from pathlib import Path

# Read version
about = {}
here  = Path(__file__).parent
with open(here / 'legendrelab' / '__version__.py', 'r') as f:
    exec(f.read(), about)


setup(
    name='legendrelab',
    version=about['__version__'],
    packages=find_packages(include=['legendrelab', 'legendrelab.*']),
    author='Caleb Kelly',
    author_email='geo.calebkelly@gmail.com',
    description='Associated Legendre functions and inclination functions for gravity field analysis',
    long_description=(here / 'README.md').read_text(encoding='utf-8'),
    long_description_content_type='text/markdown',
    install_requires=[
        'numpy',
        'numba',
        'scipy',
        'tqdm',
        'xarray',
    ],
    extras_require={
        'test': ['pytest'],
        'docs': ['sphinx', 'sphinx_rtd_theme', 'myst_parser'],
    },
    python_requires='>=3.8',
    include_package_data=True
)
