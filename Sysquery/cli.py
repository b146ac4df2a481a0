import argparse
import sys

from Sysquery import SysQuery
from Sysquery.commands import run_command
from Sysquery.features.large_files import format_files
from Sysquery.features.network import format_network
from Sysquery.features.processes import format_processes
from Sysquery.features.system_stats import format_digest
from Sysquery.runtime import humanize, metrics_snapshot, set_run_id

_FORMATTERS = {
    "largefiles": format_files,
    "digest": format_digest,
    "network": format_network,
    "process": format_processes,
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="sysquery",
        description="Gets basic information about the operating system.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    largefiles = sub.add_parser("largefiles", help="Find the largest files in the current working directory.")
    largefiles.add_argument("numfiles", nargs="?", type=int, help="The number of files to return.")
    largefiles.add_argument("--path", default="", help="Directory to scan instead of the working directory.")
    largefiles.add_argument("--strategy", default="", help="Top-k strategy: bounded or collect.")

    sub.add_parser("digest", help="Get a full system digest.")
    sub.add_parser("network", help="Get a network I/O digest.")

    process = sub.add_parser("process", help="Get the current processes expending the most memory.")
    process.add_argument("numprocesses", nargs="?", type=int, help="The number of most expensive processes to return.")
    process.add_argument("--strategy", default="", help="Top-k strategy: bounded or collect.")
    return parser


def main(argv=None):
    args = vars(build_parser().parse_args(argv))
    name = args.pop("command")
    set_run_id()

    if name == "largefiles":
        print("\nFinding your largest files...\n")
    result = run_command(name=name, args=args, client=SysQuery())
    metrics_snapshot()

    if not result.get("ok"):
        print(f"\n{humanize(result.get('error_code'), result.get('details', ''))}\n", file=sys.stderr)
        return 1
    for line in _FORMATTERS[name](result.get("data")):
        print(line)
    return 0

