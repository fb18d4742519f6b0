#!/usr/bin/env python3
"""
Example: Basic usage of Complexity Insight as a Python library
"""

from complexity_insight import analyse_file

report = analyse_file("path/to/module.py", settings={"newmi": True})

for fn in report.functions:
    print(f"{fn.name} (line {fn.line}): cyclomatic={fn.cyclomatic}, "
          f"lloc={fn.logical_sloc}, effort={fn.halstead.effort:.1f}")

print(f"Maintainability: {report.maintainability:.1f} / 100")
print(f"Dependencies: {[dep['path'] for dep in report.dependencies]}")
