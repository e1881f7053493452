from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, config file, environment, CLI overrides), repository analysis,
graph layout and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from codevisualizer.core.config_validator import layout_options_from_config, validate_config
from codevisualizer.core.layout.engine import compute_layout
from codevisualizer.core.layout.export import export_layout_json
from codevisualizer.core.services.analyzer import RepositoryAnalyzer
from codevisualizer.core.services.repo_url import parse_repo_url
from codevisualizer.domain.analysis_models import AnalysisResult
from codevisualizer.domain.config import load_config
from codevisualizer.domain.errors import InvalidRepoUrlError
from codevisualizer.domain.layout_models import LayoutResult
from codevisualizer.domain.stack_models import Category
from codevisualizer.infra.logging import LoggingConfig, configure_logging, get_logger
from codevisualizer.infra.network.github_client import GitHubClient
from codevisualizer.interface.cli import args as cli_args
from codevisualizer.utils.i18n import i18n

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 analysis failure, 2 bad input,
             130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    # 3. Configuration hierarchy
    raw_conf = load_config(args.config_path)
    raw_conf.update(cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        shown = dict(conf)
        if shown.get("github_token"):
            shown["github_token"] = "***"
        print(json.dumps(shown, ensure_ascii=False, indent=2))
        return 0

    # 4. Target resolution
    try:
        owner, name = parse_repo_url(args.repo or "")
    except InvalidRepoUrlError as e:
        print(f"ERROR: {i18n.t('cli.errors.invalid_repo', error=str(e))}", file=sys.stderr)
        return 2

    # 5. Analysis and layout
    client = GitHubClient(
        token=conf["github_token"],
        base_url=conf["api_base_url"],
        timeout=conf["request_timeout"],
    )
    analyzer = RepositoryAnalyzer(client, max_workers=conf["max_workers"])

    try:
        result = analyzer.analyze_and_apply(owner, name, branch=conf["branch"] or None)
    except KeyboardInterrupt:
        print(i18n.t("cli.status.interrupted"), file=sys.stderr)
        return 130

    if not result.ok or result.root is None:
        print(f"ERROR: {i18n.t('cli.errors.analysis_failed', error=result.error)}", file=sys.stderr)
        return 1

    options = layout_options_from_config(conf)
    graph = compute_layout(result.root, options)

    # 6. Output rendering phase
    if args.graph_out:
        if not export_layout_json(graph, args.graph_out):
            print(f"ERROR: {i18n.t('cli.errors.export_failed', path=args.graph_out)}", file=sys.stderr)
            return 1

    if args.json_output:
        print(json.dumps(_json_payload(result, graph, conf), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, graph, conf)
        if args.graph_out:
            print(i18n.t("cli.status.exported", path=args.graph_out))

    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _json_payload(result: AnalysisResult, graph: LayoutResult, conf: Dict[str, Any]) -> Dict[str, Any]:
    payload = result.summary()
    payload["layout"] = {
        "mode": conf["layout"],
        "theme": conf["theme"],
        "max_depth": conf["max_depth"],
        "search_query": conf["search_query"],
    }
    payload["graph"] = graph.to_dict()
    return payload


def _print_human_summary(result: AnalysisResult, graph: LayoutResult, conf: Dict[str, Any]) -> None:
    """Print the analysis as a terminal report."""
    details = result.details
    if details is not None:
        print(i18n.t(
            "cli.status.repo", owner=details.owner, name=details.name, language=details.language
        ))
        if details.description:
            print(f"  {details.description}")
        print(i18n.t(
            "cli.status.metrics", stars=details.stars, forks=details.forks, branch=details.default_branch
        ))

    stats = result.stats
    print(i18n.t(
        "cli.status.structure", files=stats.files, folders=stats.folders, depth=stats.max_depth
    ))

    print(i18n.t("cli.status.stack_title"))
    if result.stack.is_empty:
        print(i18n.t("cli.status.stack_empty"))
    for category in Category:
        labels = result.stack.get(category)
        if labels:
            print(f"  {i18n.t(f'cli.categories.{category.value}')}: {', '.join(labels)}")

    print(i18n.t(
        "cli.status.graph", nodes=len(graph.nodes), edges=len(graph.edges), layout=conf["layout"]
    ))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
