import codecs
import os
import re

from setuptools import find_packages, setup


# -------------------------------------------------------------

NAME = 'iterm2img'
PACKAGES = find_packages()
META_PATH = os.path.join('iterm2img', '__init__.py')
KEYWORDS = [
    'iterm2', 'terminal', 'inline images', 'escape sequence', 'imgcat'
]
CLASSIFIERS = [
    'Development Status :: 3 - Alpha',
    'Environment :: Console',
    'Intended Audience :: Developers',
    'Natural Language :: English',
    'License :: OSI Approved :: BSD License',
    'Topic :: Terminals',
    'Topic :: Multimedia :: Graphics',
    'Topic :: Software Development :: Libraries :: Python Modules',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
]

INSTALL_REQUIRES = [
    'Pillow',
    'PyYAML>=5.1',
    'click>=7',
    'easydict>=1.7',
]
TEST_REQUIRES = [
    'pytest',
]

# -------------------------------------------------------------

HERE = os.path.abspath(os.path.dirname(__file__))


def read(*parts):
    """
    Build an absolute path from *parts* and return the contents of the
    resulting file.  Assume UTF-8 encoding.
    """
    with codecs.open(os.path.join(HERE, *parts), 'rb', 'utf-8') as f:
        return f.read()


META_FILE = read(META_PATH)


def find_meta(meta):
    """
    Extract __*meta*__ from META_FILE.
    """
    meta_match = re.search(
        r"^__{meta}__ = ['\"]([^'\"]*)['\"]".format(meta=meta),
        META_FILE, re.M
    )
    if meta_match:
        return meta_match.group(1)
    raise RuntimeError('Unable to find __{meta}__ string.'.format(meta=meta))


setup(
    name=NAME,
    version=find_meta('version'),
    description=find_meta('description'),
    long_description=read('README.md'),
    long_description_content_type='text/markdown',
    license=find_meta('license'),
    author=find_meta('author'),
    author_email=find_meta('email'),
    maintainer=find_meta('author'),
    maintainer_email=find_meta('email'),
    url=find_meta('uri'),
    keywords=KEYWORDS,
    packages=PACKAGES,
    classifiers=CLASSIFIERS,
    include_package_data=True,
    package_data={
        'iterm2img': ['base_config.yml'],
    },
    install_requires=INSTALL_REQUIRES,
    extras_require={
        'test': TEST_REQUIRES,
    },
    entry_points="""
        [console_scripts]
        iterm2img=iterm2img.cli:cli
    """,
    python_requires='>=3.6',
)
