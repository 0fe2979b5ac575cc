"""tldparse CLI."""

import argparse
import dataclasses
import json
import logging
import sys

from ._version import version as __version__
from .tldparse import PUBLIC_SUFFIX_LIST_URLS, TLDParse


def main() -> None:
    """tldparse CLI main command."""
    logging.basicConfig()

    parser = argparse.ArgumentParser(
        prog="tldparse",
        description="Split a url or fqdn into subdomain, domain and public suffix",
    )

    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "input", metavar="fqdn|url", type=str, nargs="*", help="fqdn or url"
    )

    parser.add_argument(
        "-u",
        "--update",
        default=False,
        action="store_true",
        help="force fetch the latest PSL rules",
    )
    parser.add_argument(
        "-c", "--cache_dir", help="use an alternate PSL rules caching folder"
    )
    parser.add_argument(
        "--suffix_list_url",
        action="append",
        required=False,
        help="use an alternate URL or local file for PSL rules; repeat for mirrors",
    )
    parser.add_argument(
        "--no-fallback",
        dest="fallback_to_snapshot",
        default=True,
        action="store_false",
        help="fail instead of using the bundled PSL snapshot",
    )
    parser.add_argument(
        "--rfc6761",
        default=False,
        action="store_true",
        help="treat localhost, local, example, invalid and test as valid hosts",
    )
    parser.add_argument(
        "--valid-host",
        dest="valid_hosts",
        action="append",
        default=[],
        help="treat this hostname as a complete domain; repeatable",
    )
    parser.add_argument(
        "--icann",
        default=False,
        action="store_true",
        help="print results for the ICANN rules only, ignoring private domains",
    )
    parser.add_argument(
        "-j",
        "--json",
        default=False,
        action="store_true",
        help="output in json format",
    )

    args = parser.parse_args()

    obj_kwargs = {
        "rfc6761": args.rfc6761,
        "valid_hosts": args.valid_hosts,
        "fallback_to_snapshot": args.fallback_to_snapshot,
        "suffix_list_urls": args.suffix_list_url or PUBLIC_SUFFIX_LIST_URLS,
    }
    if args.cache_dir:
        obj_kwargs["cache_dir"] = args.cache_dir

    tld_parse = TLDParse(**obj_kwargs)

    if args.update:
        tld_parse.update(True)
    elif not args.input:
        parser.print_usage()
        sys.exit(1)

    for i in args.input:
        result = tld_parse(i)
        if args.json:
            print(json.dumps(dataclasses.asdict(result)))
            continue

        parts = result.icann if args.icann else result.all_rules
        print(
            " ".join(
                field or ""
                for field in (parts.subdomain, parts.site_domain, parts.public_suffix)
            )
        )
