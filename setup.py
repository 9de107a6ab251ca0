from pathlib import Path

from setuptools import find_packages, setup


def get_version():
    ns = {}
    exec(Path(__file__).with_name('fibqueue').joinpath('version.py').read_text(),
         ns)
    return ns['__version__']


setup(name='fibqueue',
      version=get_version(),
      description='Fibonacci heap priority queue with graph algorithms',
      packages=find_packages(exclude=['tests']),
      python_requires='>=3.9',
      install_requires=['numpy', 'click', 'treelib>=1.6.2'],
      extras_require={'test': ['pytest', 'scipy']},
      entry_points={'console_scripts': ['fibqueue = fibqueue.__main__:main']})
