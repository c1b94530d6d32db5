# -*- coding: utf-8 -*-
# pydoit task file
# see https://pydoit.org/
# run from this dir with `doit`, or `doit list`, `doit help` etc. (pip install doit 1st)

from doit.action import CmdAction

_FLAG_PARAMS = [
    {"name": "help", "long": "help", "default": False, "type": bool},
    {"name": "keyword", "short": "k", "default": ""},
    {"name": "offline", "short": "o", "default": False, "type": bool},
    {"name": "retry", "short": "r", "default": False, "type": bool},
    {"name": "print_logs", "short": "p", "default": False, "type": bool},
    {"name": "full_trace", "short": "f", "default": False, "type": bool},
]


def _build_pytest_command(
    test_dir,
    keyword="",
    offline=False,
    retry=False,
    print_logs=False,
    full_trace=False,
):
    """Helper function to build the pytest command for the test task."""
    cmd = ["pytest"]

    if print_logs:
        cmd.append("--capture=no")
    if full_trace:
        cmd.append("--full-trace")

    cmd.extend(["--color=yes", "-vv", "-x"])

    if retry:
        cmd.append("--lf")
    if keyword:
        cmd.extend(["-k", f'"{keyword}"'])
    if offline:
        # skip anything that opens local sockets
        cmd.extend(["-m", '"not network"'])

    cmd.append(test_dir)
    return " ".join(cmd)


def task_install():
    """Install scpicli in editable mode, with test extras"""
    return {
        "actions": ["pip install -e .[test]"],
        "verbosity": 2,
    }


def task_test():
    """Run the test suite (test in test/logic/)."""

    def router(keyword, offline, retry, print_logs, full_trace, help=False):
        if help:
            return """echo '
Test Runner Help
================

Filter Options:
  -k, --keyword TEXT    Only run tests matching the keyword expression
                        Example: -k "exchange and not timeout"
  -o, --offline         Skip tests marked "network" (local TCP sockets)
  -r, --retry           Only run previously failed tests

Output Options:
  -p, --print-logs      Print test logs to console instead of capturing
  -f, --full-trace      Show full traceback on errors

Examples:
  doit test                 # Run all tests
  doit test -k monitor      # Run tests containing "monitor"
  doit test -o -p           # Run socket-free tests with logs
  '"""
        return _build_pytest_command(
            "test/logic/",
            keyword=keyword,
            offline=offline,
            retry=retry,
            print_logs=print_logs,
            full_trace=full_trace,
        )

    return {
        "actions": [CmdAction(router)],
        "params": _FLAG_PARAMS,
        "verbosity": 2,
    }


def task_format():
    """Format code using ruff."""
    return {
        "actions": [
            "ruff check --select I --fix src/scpicli test dodo.py",
            "ruff format src/scpicli test dodo.py",
        ],
        "verbosity": 2,
    }
