from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates parsed arguments into
configuration overrides.
"""

import argparse
from typing import Any, Dict

from codevisualizer.domain.constants import APP_NAME
from codevisualizer.domain.layout_models import ColorTheme, LayoutMode
from codevisualizer.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=i18n.t("app.description"),
    )

    # --- Target ---
    p.add_argument("repo", nargs="?", default=None, help=i18n.t("cli.args.repo"))
    p.add_argument("-b", "--branch", dest="branch", default=None, help=i18n.t("cli.args.branch"))

    # --- Layout ---
    p.add_argument("-d", "--depth", dest="max_depth", type=int, default=None, help=i18n.t("cli.args.depth"))
    p.add_argument(
        "--layout",
        choices=[m.value for m in LayoutMode],
        default=None,
        help=i18n.t("cli.args.layout"),
    )
    p.add_argument(
        "--theme",
        choices=[t.value for t in ColorTheme],
        default=None,
        help=i18n.t("cli.args.theme"),
    )
    p.add_argument("-s", "--search", dest="search_query", default=None, help=i18n.t("cli.args.search"))

    # --- Output ---
    p.add_argument("--graph-out", dest="graph_out", default=None, help=i18n.t("cli.args.graph_out"))
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))

    # --- Configuration and Diagnostics ---
    p.add_argument("--config", dest="config_path", default=None, help=i18n.t("cli.args.config"))
    p.add_argument("--token", dest="github_token", default=None, help=i18n.t("cli.args.token"))
    p.add_argument("--log-file", dest="log_file", default=None, help=i18n.t("cli.args.log_file"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually passed are included.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    mapping = {
        "branch": args.branch,
        "max_depth": args.max_depth,
        "layout": args.layout,
        "theme": args.theme,
        "search_query": args.search_query,
        "github_token": args.github_token,
    }
    return {k: v for k, v in mapping.items() if v is not None}
