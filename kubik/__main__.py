"""Command line entry point: `python -m kubik [MASTER_URL]`."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from kubik import __version__
from kubik.models.state.app_settings import ConfigLoadError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubik",
        description="Watch the pods of a Kubernetes namespace and follow their logs.",
    )
    parser.add_argument(
        "master",
        nargs="?",
        help="API server URL; defaults to $KUBERNETES_MASTER or the current kubeconfig context",
    )
    parser.add_argument("-n", "--namespace", help="namespace to watch initially")
    parser.add_argument("--kubeconfig", type=Path, help="path to the kubeconfig file")
    parser.add_argument("--log-file", help="also write debug records to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="minimum level of the debug panel records (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from kubik.app import KubikApp
    from kubik.controllers.cluster.connection import load_profile
    from kubik.utils.log_setup import configure_logging

    configure_logging(args.log_level, log_file=args.log_file)
    try:
        profile = load_profile(args.master, args.kubeconfig)
    except ConfigLoadError as exc:
        print(f"kubik: {exc}", file=sys.stderr)
        return 1

    KubikApp(profile, namespace=args.namespace).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
