#!/usr/bin/env python3
"""
Demo: Generate Graphviz DOT diagrams of the serialization dependency graph.

Shows all three visualization modes (SIMPLE, DETAILED, NAMESPACE).
"""

from serdepth.analyzer import analyze_universe
from serdepth.examples import build_example_project_universe
from serdepth.backends import generate_dot, save_dot_file, DotMode


def main():
    report = analyze_universe(build_example_project_universe())

    print("=" * 80)
    print("DOT GENERATOR DEMO")
    print("=" * 80)

    for mode in [DotMode.SIMPLE, DotMode.DETAILED, DotMode.NAMESPACE]:
        print(f"\n{mode.value.upper()} MODE:")
        print("-" * 80)

        dot_output = generate_dot(report.graph, violations=report.violations, mode=mode, roots=report.roots)
        print(dot_output)

        filename = f"serialization_{mode.value}.dot"
        save_dot_file(report.graph, filename, violations=report.violations, mode=mode, roots=report.roots)
        print(f"\nSaved to: {filename}")

    print("\n" + "=" * 80)
    print("To visualize the diagrams:")
    print("  dot -Tpng serialization_simple.dot -o serialization_simple.png")
    print("  dot -Tpng serialization_detailed.dot -o serialization_detailed.png")
    print("  dot -Tpng serialization_namespace.dot -o serialization_namespace.png")
    print("=" * 80)


if __name__ == "__main__":
    main()
