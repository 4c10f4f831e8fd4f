#!/usr/bin/env python3
"""
Complete Pipeline Demo: Source → Program → Analysis → Truth Table

Shows the full workflow:
1. Parse a PREMISE/THEREFORE argument
2. Analyze the program
3. Evaluate it and print the truth table
4. Export the program and table as YAML
"""

import sys

from valid8.analyzer import analyze_program
from valid8.backends import print_table
from valid8.environment import Environment
from valid8.examples import EXAMPLES, get_example
from valid8.pipeline import evaluate_argument, parse_argument
from valid8.serialization import program_to_yaml, truth_table_to_yaml


def main():
    name = sys.argv[1] if len(sys.argv) > 1 else "hypothetical-syllogism"
    example = get_example(name)

    print("=" * 80)
    print(f"PIPELINE DEMO: {example.name}")
    print("=" * 80)
    print(example.source)

    # =========================================================================
    # STEP 1: Parse
    # =========================================================================
    print("\n1. PARSING...")
    program = parse_argument(example.source)
    print(f"   ✓ Statements: {len(program.predicates)}")
    for stmt in program.predicates:
        print(f"      {stmt}")

    # =========================================================================
    # STEP 2: Analyze
    # =========================================================================
    print("\n2. ANALYZING...")
    report = analyze_program(program)
    print(f"   ✓ Premises: {report.premise_count}")
    print(f"   ✓ Variables: {report.variables}")
    print(f"   ✓ Truth table rows: {report.truth_table_rows}")
    print(f"   ✓ Max depth: {report.max_statement_depth}")

    if report.warnings:
        print(f"\n   Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"      - {warning}")

    # =========================================================================
    # STEP 3: Evaluate
    # =========================================================================
    print("\n3. EVALUATING...")
    result = evaluate_argument(program, Environment(), table_sink=print_table)
    print(f"   ✓ Valid: {result.valid} (expected {example.valid})")

    # =========================================================================
    # STEP 4: Export
    # =========================================================================
    print("\n4. YAML EXPORT:")
    print("-" * 80)
    print(program_to_yaml(program))
    if result.table is not None:
        print(truth_table_to_yaml(result.table))

    print("=" * 80)
    print("Other examples: " + ", ".join(sorted(EXAMPLES)))
    print("=" * 80)


if __name__ == "__main__":
    main()
