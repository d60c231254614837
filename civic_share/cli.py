"""Command-line interface for Civic Share."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import structlog
import yaml

from .calculators.attribution import attribute_revenue
from .calculators.explain import explain_contribution
from .calculators.scenario import adjustment_bounds, tax_impact_per_resident
from .exporters.csv_exporter import CsvExporter
from .exporters.json_exporter import JsonExporter, build_summary, write_jurisdiction_data
from .extractors.json_file import JsonFileExtractor, load_jurisdiction_file
from .models.manifest import JurisdictionEntry, Manifest
from .models.schema import ICON_LABELS, CategoryAdjustment, JurisdictionData, ResidentProfile
from .state.session import BudgetSession
from .utils.formatting import (
    format_currency,
    format_percentage,
    generate_comparison_text,
    get_jurisdiction_size,
    per_capita,
    round_daily,
)
from .validators.jurisdiction import JurisdictionValidator

ROOT_DIR = Path(__file__).parent.parent


def configure_logging(verbosity: int) -> None:
    """Route structlog output to stderr at a level set by -v flags."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def load_config() -> dict[Any, Any]:
    """Load jurisdictions configuration from YAML.

    Returns:
        Configuration dictionary
    """
    config_path = ROOT_DIR / "config" / "jurisdictions.yaml"
    with open(config_path) as f:
        return cast(dict[Any, Any], yaml.safe_load(f))


def load_jurisdiction(jurisdiction_id: str) -> JurisdictionData:
    extractor = JsonFileExtractor(load_config(), base_dir=ROOT_DIR)
    return extractor.extract(jurisdiction_id)


def build_profile(data: JurisdictionData, args: argparse.Namespace) -> ResidentProfile:
    """Start from the jurisdiction's average resident and apply command-line overrides.

    Raises:
        ValueError: If the jurisdiction has no average resident and no income was given
    """
    overrides = {
        "housing_status": args.housing,
        "home_value": args.home_value,
        "household_income": args.income,
        "works_locally": args.works_locally,
        "household_size": args.household_size,
        "vehicles_registered": args.vehicles,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}

    if data.average_resident is not None:
        base = data.average_resident.model_dump()
    elif "household_income" in overrides:
        base = {
            "housing_status": "rent",
            "works_locally": False,
            "household_size": 1,
        }
    else:
        raise ValueError(
            f"{data.jurisdiction.name} has no average resident; pass --income at least"
        )

    base.update(overrides)
    base["jurisdiction_id"] = data.jurisdiction.id
    return ResidentProfile.model_validate(base)


def add_profile_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--housing", choices=["own", "rent"], help="Housing status")
    parser.add_argument("--home-value", type=float, help="Home value in dollars")
    parser.add_argument("--income", type=float, help="Annual household income")
    parser.add_argument(
        "--works-locally",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Whether someone in the household works in the jurisdiction",
    )
    parser.add_argument("--household-size", type=float, help="People in the household")
    parser.add_argument("--vehicles", type=int, help="Registered vehicles")


def list_command(args: argparse.Namespace) -> int:
    """List configured jurisdictions.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        config = load_config()
        default = config.get("default_jurisdiction")
        for jurisdiction_id, entry in config["jurisdictions"].items():
            entry = entry or {}
            marker = "*" if jurisdiction_id == default else " "
            print(
                f"{marker} {jurisdiction_id:<24} {entry.get('name', jurisdiction_id):<28} "
                f"{entry.get('status', 'active')}"
            )
        return 0

    except Exception as e:
        print(f"❌ Error listing jurisdictions: {e}", file=sys.stderr)
        return 1


def calculate_command(args: argparse.Namespace) -> int:
    """Calculate a resident's contribution and print the breakdown.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        data = load_jurisdiction(args.jurisdiction)
        session = BudgetSession()
        session.load(data)
        session.set_resident_profile(build_profile(data, args))

        contribution = session.contribution
        if contribution is None:
            print("❌ Not enough data to calculate a contribution", file=sys.stderr)
            return 1

        jurisdiction = data.jurisdiction
        rounding = jurisdiction.config.daily_rounding

        size = get_jurisdiction_size(jurisdiction.population)
        budget_per_resident = per_capita(jurisdiction.total_budget, jurisdiction.population)
        print(f"{jurisdiction.name} ({jurisdiction.fiscal_year}), a {size} {jurisdiction.type}")
        print(f"  Budget per resident: {format_currency(budget_per_resident)}")
        print(f"  Annual:  {format_currency(contribution.total_annual)}")
        print(f"  Monthly: {format_currency(contribution.total_monthly)}")
        print(f"  Daily:   {format_currency(round_daily(contribution.total_daily, rounding))}")
        print(f"  Share of budget: {format_percentage(contribution.percent_of_budget, 4)}")

        print("\nBy revenue type:")
        for bucket, amount in contribution.breakdown.model_dump().items():
            if amount > 0:
                label = bucket.replace("_", " ").title()
                print(f"  {label:<16} {format_currency(amount):>14}")

        if args.explain:
            print("\nHow it adds up:")
            for line in explain_contribution(session.resident_profile, data.revenue_sources):
                print(f"  {line.label}: {line.formula}")

        print(f"\nWhere it goes ({jurisdiction.config.comparison_phrase}):")
        for allocation in contribution.service_allocations:
            daily = format_currency(round_daily(allocation.daily, rounding))
            print(
                f"  {allocation.category_name:<28} {format_currency(allocation.annual):>12}"
                f"  {daily}/day  ({ICON_LABELS[allocation.icon]})"
            )

        attribution = attribute_revenue(data.revenue_sources, contribution.total_annual)
        print(f"\nWho funds {jurisdiction.name}:")
        print(f"  Residents:  {format_percentage(attribution.residential_percent)}")
        print(f"  Businesses: {format_percentage(attribution.commercial_percent)}")
        print(f"  Government: {format_percentage(attribution.government_percent)}")
        print(f"  Visitors:   {format_percentage(attribution.visitor_percent)}")

        print()
        for sentence in generate_comparison_text(contribution, jurisdiction):
            print(sentence)

        return 0

    except Exception as e:
        print(f"❌ Error calculating contribution: {e}", file=sys.stderr)
        return 1


def parse_adjustment(text: str) -> tuple[str, float]:
    """Parse 'category-id=amount' into its parts.

    Raises:
        ValueError: If the text is not of that form
    """
    category_id, sep, amount = text.partition("=")
    if not sep or not category_id:
        raise ValueError(f"Adjustment '{text}' must look like CATEGORY_ID=AMOUNT")
    return category_id, float(amount.replace(",", ""))


def simulate_command(args: argparse.Namespace) -> int:
    """Validate a budget scenario and print its impact.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for a valid scenario, 1 for an invalid one or failure)
    """
    try:
        data = load_jurisdiction(args.jurisdiction)
        session = BudgetSession()
        session.load(data)
        session.set_resident_profile(build_profile(data, args))
        scenario = session.start_scenario()
        if scenario is None:
            print("❌ Not enough data to start a scenario", file=sys.stderr)
            return 1

        print(f"Scenario for {data.jurisdiction.name}:")
        categories = {category.id: category for category in data.budget_categories}
        for text in args.adjust:
            category_id, amount = parse_adjustment(text)
            if not session.adjust_category(category_id, amount):
                # Kept so the scenario reports the id as not found
                scenario.adjustments.append(
                    CategoryAdjustment(
                        category_id=category_id,
                        original_amount=0.0,
                        new_amount=amount,
                        percent_change=0.0,
                    )
                )
                continue

            floor, ceiling = adjustment_bounds(categories[category_id])
            print(
                f"  {categories[category_id].name}: {format_currency(amount, False)} "
                f"(floor {format_currency(floor, False)}, "
                f"suggested max {format_currency(ceiling, False)})"
            )

        impact = session.scenario_impact()
        if impact is None:
            print("❌ No scenario in progress", file=sys.stderr)
            return 1

        per_resident = tax_impact_per_resident(impact, data.jurisdiction.population)
        print(f"Budget change: {format_currency(impact.budget_change, False)}")
        print(
            f"Per resident:  {format_currency(per_resident)}/year "
            f"({format_currency(per_resident / 365)}/day)"
        )
        if session.contribution is not None:
            print(
                "Your contribution today: "
                f"{format_currency(session.contribution.total_annual)}/year"
            )

        if impact.service_implications:
            print("\nService implications:")
            for implication in impact.service_implications:
                print(f"  [{implication.severity}] {implication.change_description}")

        if impact.errors:
            print("\n❌ Scenario is not feasible:")
            for error in impact.errors:
                print(f"  {error}")
            return 1

        print("\n✅ Scenario respects all fixed-cost constraints")
        return 0

    except Exception as e:
        print(f"❌ Error simulating scenario: {e}", file=sys.stderr)
        return 1


def validate_command(args: argparse.Namespace) -> int:
    """Validate jurisdiction data files.

    Validates the given files, or every configured jurisdiction when none are given.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        config = load_config()
        tolerance = config.get("validation", {}).get("tolerance_pct", 5.0)

        if args.files:
            paths = [Path(p) for p in args.files]
        else:
            extractor = JsonFileExtractor(config, base_dir=ROOT_DIR)
            paths = [extractor.path_for(j) for j in extractor.available_jurisdictions()]

        if not paths:
            print("No jurisdiction files found to validate")
            return 0

        all_valid = True
        for path in paths:
            print(f"\nValidating {path}...")

            try:
                data = load_jurisdiction_file(path)
            except ValueError as e:
                print(f"  ❌ {e}")
                all_valid = False
                continue

            validator = JurisdictionValidator(tolerance_pct=tolerance)
            if not validator.validate(data):
                all_valid = False
            print(validator.get_report())

        if all_valid:
            print(f"\n✅ All {len(paths)} files validated successfully")
            return 0
        else:
            print("\n❌ Some files failed validation")
            return 1

    except Exception as e:
        print(f"❌ Error validating: {e}", file=sys.stderr)
        return 1


def export_command(args: argparse.Namespace) -> int:
    """Export a contribution summary (JSON or CSV) or the jurisdiction data itself.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        config = load_config()
        data = load_jurisdiction(args.jurisdiction)
        output_dir = Path(args.output_dir or config.get("output_dir", "output"))

        if args.format == "data":
            path = Path(args.output) if args.output else output_dir / f"{data.jurisdiction.id}.json"
            write_jurisdiction_data(data, path)
            print(f"✅ Saved jurisdiction data to {path}")
            return 0

        session = BudgetSession()
        session.load(data)
        session.set_resident_profile(build_profile(data, args))
        if session.contribution is None or session.resident_profile is None:
            print("❌ Not enough data to calculate a contribution", file=sys.stderr)
            return 1

        summary = build_summary(data.jurisdiction, session.resident_profile, session.contribution)
        exporter = CsvExporter() if args.format == "csv" else JsonExporter()
        path = Path(args.output) if args.output else exporter.output_path(output_dir, summary)
        exporter.export(summary, path)

        print(f"✅ Saved {args.format.upper()} summary to {path}")
        return 0

    except Exception as e:
        print(f"❌ Error exporting: {e}", file=sys.stderr)
        return 1


def generate_manifest(args: argparse.Namespace) -> int:
    """Generate manifest.json listing all configured jurisdictions.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        print("Generating manifest...")

        config = load_config()
        extractor = JsonFileExtractor(config, base_dir=ROOT_DIR)
        output_dir = Path(args.output_dir or config.get("output_dir", "output"))

        entries: list[JurisdictionEntry] = []
        for jurisdiction_id, entry in config["jurisdictions"].items():
            entry = entry or {}
            fiscal_year = population = total_budget = None

            path = extractor.path_for(jurisdiction_id)
            if path.exists():
                data = load_jurisdiction_file(path)
                fiscal_year = data.jurisdiction.fiscal_year
                population = data.jurisdiction.population
                total_budget = data.jurisdiction.total_budget

            entries.append(
                JurisdictionEntry(
                    id=jurisdiction_id,
                    name=entry.get("name", jurisdiction_id),
                    jurisdiction_type=entry.get("jurisdiction_type", "unknown"),
                    status=entry.get("status", "coming_soon"),
                    fiscal_year=fiscal_year,
                    population=population,
                    total_budget=total_budget,
                )
            )

        manifest = Manifest(
            jurisdictions=entries,
            default_jurisdiction=config.get("default_jurisdiction"),
            last_updated=datetime.now().isoformat(),
        )

        output_dir.mkdir(parents=True, exist_ok=True)
        manifest_file = output_dir / "manifest.json"
        with open(manifest_file, "w") as f:
            json.dump(manifest.model_dump(mode="json"), f, indent=2)

        print(f"✅ Generated {manifest_file}")
        print(f"   Jurisdictions: {len(entries)}")
        print(f"   Active: {sum(1 for e in entries if e.status == 'active')}")

        return 0

    except Exception as e:
        print(f"❌ Error generating manifest: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Civic Share - Estimate what you contribute to your local government budget"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log more (-v info, -vv debug)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # List command
    subparsers.add_parser("list", help="List configured jurisdictions")

    # Calculate command
    calculate_parser = subparsers.add_parser("calculate", help="Calculate your contribution")
    calculate_parser.add_argument("jurisdiction", help="Jurisdiction ID (e.g., liberty-township)")
    add_profile_arguments(calculate_parser)
    calculate_parser.add_argument(
        "--explain", action="store_true", help="Show how each revenue source adds up"
    )

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Try a budget scenario")
    simulate_parser.add_argument("jurisdiction", help="Jurisdiction ID")
    simulate_parser.add_argument(
        "--adjust",
        action="append",
        default=[],
        metavar="CATEGORY_ID=AMOUNT",
        help="New annual amount for a category (repeatable)",
    )
    add_profile_arguments(simulate_parser)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate jurisdiction data files")
    validate_parser.add_argument("files", nargs="*", help="Files to validate (default: all)")

    # Export command
    export_parser = subparsers.add_parser("export", help="Export a shareable summary")
    export_parser.add_argument("jurisdiction", help="Jurisdiction ID")
    export_parser.add_argument(
        "--format", choices=["json", "csv", "data"], default="json", help="Export format"
    )
    export_parser.add_argument("--output", help="Output file path")
    export_parser.add_argument("--output-dir", help="Output directory (default from config)")
    add_profile_arguments(export_parser)

    # Generate manifest command
    manifest_parser = subparsers.add_parser("manifest", help="Generate manifest.json")
    manifest_parser.add_argument("--output-dir", help="Output directory (default from config)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "list":
        return list_command(args)
    elif args.command == "calculate":
        return calculate_command(args)
    elif args.command == "simulate":
        return simulate_command(args)
    elif args.command == "validate":
        return validate_command(args)
    elif args.command == "export":
        return export_command(args)
    elif args.command == "manifest":
        return generate_manifest(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
