"""`tldparse` splits a hostname into its public suffix, registrable domain, and
subdomain, using the Public Suffix List (PSL).

    >>> import tldparse
    >>> tldparse.get_public_suffix('https://www.example.co.uk')
    'co.uk'
    >>> tldparse.get_domain('https://www.example.co.uk')
    'example.co.uk'
    >>> tldparse.get_subdomain('https://www.example.co.uk')
    'www'

`parse` returns every tier at once, for the ICANN and PRIVATE rules together
and for the ICANN rules alone.

    >>> result = tldparse.parse('http://foo.blogspot.com')
    >>> (result.subdomain, result.domain, result.public_suffix)
    ('', 'foo.blogspot.com', 'blogspot.com')
    >>> result.icann.domain
    'blogspot.com'

IP addresses, invalid hostnames, and configured valid hosts like "localhost"
are reported in the result instead of being matched against the list.
"""

from setuptools import setup

INSTALL_REQUIRES = ["idna", "requests>=2.1.0", "requests-file>=1.4", "filelock>=3.0.8"]

TESTING_REQUIRES = ["pytest", "pytest-mock", "responses"]

setup(
    name="tldparse",
    version="1.0.0",
    description=(
        "Splits a hostname into its public suffix, registrable domain, and "
        "subdomain, using the Public Suffix List (PSL), with ICANN-only "
        "results alongside the full list."
    ),
    license="BSD License",
    keywords="tld domain subdomain url parse public suffix list publicsuffix publicsuffixlist psl",
    packages=["tldparse"],
    package_data={"tldparse": [".tld_set_snapshot", "py.typed"]},
    include_package_data=True,
    python_requires=">=3.9",
    long_description=__doc__,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Topic :: Utilities",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    entry_points={
        "console_scripts": [
            "tldparse = tldparse.cli:main",
        ]
    },
    install_requires=INSTALL_REQUIRES,
    extras_require={"testing": TESTING_REQUIRES},
)
