from setuptools import setup

setup(
    name='libtdl',
    version='1.0',
    packages=['libtdl', 'libtdl.catalog', 'libtdl.compiler', 'libtdl.formats', 'libtdl.generator', 'libtdl.grammars', 'libtdl.language',
              'libtdl.normalizer'],
    url='',
    license='MIT',
    author='Matteo Belenchia',
    author_email='matteo.belenchia@unicam.it',
    description='libtdl package',
    install_requires=['lark'],
    extras_require={'test': ['pytest']}
)
