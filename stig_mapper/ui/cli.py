"""Command-line interface and main entry point."""

from __future__ import annotations
from typing import List, Optional
import argparse
import json
import sys

from stig_mapper.catalog import load_cci_list
from stig_mapper.checklist import MergePolicy, export_checklist, merge_checklists
from stig_mapper.core.constants import APP_NAME, VERSION
from stig_mapper.core.logging import LOG
from stig_mapper.exceptions import StigError
from stig_mapper.io.file_ops import FO
from stig_mapper.mapping import MappingResult, create_mapping_result


def format_summary_text(result: MappingResult) -> str:
    """Format mapping statistics as human-readable text."""
    summary = result.summary
    checklist = result.checklist
    total = summary.total_controls

    def pct(count: int) -> str:
        return f"{(count / total * 100) if total else 0:5.1f}%"

    lines = []
    lines.append("=" * 80)
    lines.append("STIG to NIST SP 800-53 Mapping")
    lines.append("=" * 80)
    lines.append(f"STIG: {checklist.stig_info.title or '-'} {checklist.stig_info.release_info}".rstrip())
    lines.append(f"Host: {checklist.asset.host_name or '-'}")
    lines.append(f"Vulnerabilities: {len(checklist.vulnerabilities)}")
    lines.append(f"CCI records: {len(result.cci_mappings)}")
    lines.append("")
    lines.append(f"NIST Controls: {total}")
    lines.append("-" * 40)
    lines.append(f"  {'non-compliant':20} {summary.non_compliant_controls:6} ({pct(summary.non_compliant_controls)})")
    lines.append(f"  {'compliant':20} {summary.compliant_controls:6} ({pct(summary.compliant_controls)})")
    lines.append(f"  {'not-applicable':20} {summary.not_applicable_controls:6} ({pct(summary.not_applicable_controls)})")
    lines.append(f"  {'not-reviewed':20} {summary.not_reviewed_controls:6} ({pct(summary.not_reviewed_controls)})")
    lines.append("")
    lines.append("Open Findings by Severity:")
    lines.append("-" * 40)
    lines.append(f"  CAT I   (high)   {summary.high_risk_findings:6}")
    lines.append(f"  CAT II  (medium) {summary.medium_risk_findings:6}")
    lines.append(f"  CAT III (low)    {summary.low_risk_findings:6}")
    lines.append("=" * 80)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stig-mapper",
        description=f"{APP_NAME} v{VERSION}",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    input_group = parser.add_argument_group("Inputs")
    input_group.add_argument("--ckl", nargs="+", metavar="FILE", help="Checklist file(s); several are merged")
    input_group.add_argument("--cci", metavar="FILE", help="DISA CCI list XML")
    input_group.add_argument("--strict-merge", action="store_true",
                             help="Fail when merged checklists have different asset/STIG metadata")

    map_group = parser.add_argument_group("Map to NIST SP 800-53")
    map_group.add_argument("--map", action="store_true", help="Write the mapping result as JSON")
    map_group.add_argument("--out", help="Output JSON path (default: stdout)")
    map_group.add_argument("--stats", action="store_true", help="Print mapping statistics")
    map_group.add_argument("--stats-format", choices=["text", "json"], default="text",
                           help="Statistics output format (default: text)")

    export_group = parser.add_argument_group("Export Checklist")
    export_group.add_argument("--export-ckl", metavar="OUT", help="Write the (merged) checklist as CKL")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments (None = sys.argv)

    Returns:
        Exit code (0 = success)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    LOG.file_logging()
    if args.verbose:
        LOG.verbose()

    if not args.ckl:
        parser.error("--ckl is required")
    if (args.map or args.stats) and not args.cci:
        parser.error("--map and --stats require --cci")
    if not (args.map or args.stats or args.export_ckl):
        parser.error("nothing to do: give --map, --stats or --export-ckl")

    policy = MergePolicy.STRICT if args.strict_merge else MergePolicy.FIRST

    try:
        checklist = merge_checklists(args.ckl, policy)

        if args.export_ckl:
            path = export_checklist(checklist, args.export_ckl)
            print(f"[INFO] Checklist written: {path}", file=sys.stderr)

        if args.map or args.stats:
            result = create_mapping_result(checklist, load_cci_list(args.cci))

            if args.map:
                payload = result.to_json()
                if args.out:
                    with FO.atomic(args.out) as handle:
                        handle.write(payload)
                    print(f"[INFO] Mapping written: {args.out}", file=sys.stderr)
                else:
                    print(payload)

            if args.stats:
                if args.stats_format == "json":
                    print(json.dumps(result.summary.as_dict(), indent=2))
                else:
                    print(format_summary_text(result))
    except StigError as exc:
        LOG.e(str(exc))
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
