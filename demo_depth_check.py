"""
Demo: Run the depth check on the example game project and print the report.
"""

from serdepth.examples import build_example_project_universe
from serdepth.analyzer import analyze_universe
from serdepth.serialization import universe_to_yaml


def print_report(report):
    """Pretty-print a DepthCheckReport."""
    print()
    print("=" * 70)
    print("SERIALIZATION DEPTH REPORT")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Total Types:           {report.total_types}")
    print(f"  Project Types:         {report.project_types}")
    print(f"  Serializable Types:    {report.serializable_types}")
    print(f"  Nesting Edges:         {report.total_edges}")
    print(f"  Max Depth:             {report.max_depth}")
    print()

    print("🔗 ROOTS")
    for root in report.roots:
        print(f"  {root}")
    print()

    if report.violations:
        print("❌ MEMBER CHAINS REACHING THE DEPTH BOUND")
        for i, violation in enumerate(report.violations, 1):
            print(f"  {i}. {violation.field_path}")
            for line in violation.lines():
                print(f"       {line}")
    else:
        print("✨ NO VIOLATIONS - every chain fits the serializer!")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
        print()


if __name__ == "__main__":
    universe = build_example_project_universe()

    report = analyze_universe(universe)

    print_report(report)

    # Also save to YAML so it can be fed to the serdepth command
    yaml_str = universe_to_yaml(universe)
    with open("example_universe.yaml", "w") as f:
        f.write(yaml_str)
    print("✅ Universe exported to example_universe.yaml")
