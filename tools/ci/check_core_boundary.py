from __future__ import annotations

import argparse
import ast
from dataclasses import dataclass
from pathlib import Path

# core must stay channel agnostic: no channel adapters, no card wire formats
DEFAULT_FORBIDDEN_PREFIXES = (
    "remote_support.adapters",
    "botbuilder",
    "adaptivecards",
)


@dataclass(frozen=True)
class BoundaryViolation:
    file: str
    line: int
    module: str
    rule: str


def _imported_modules(node: ast.AST, package: str) -> list[str]:
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    if isinstance(node, ast.ImportFrom):
        if node.level:
            # relative import: resolve against the file's package
            parts = package.split(".") if package else []
            base = parts[: len(parts) - (node.level - 1)] if node.level > 1 else parts
            module = ".".join([*base, node.module] if node.module else base)
        else:
            module = node.module or ""
        return [f"{module}.{alias.name}" if module else alias.name for alias in node.names]
    return []


def _package_of(py_file: Path, root: Path, root_package: str) -> str:
    relative_parent = py_file.relative_to(root).parent
    parts = [root_package, *relative_parent.parts] if root_package else list(relative_parent.parts)
    return ".".join(part for part in parts if part)


def scan_boundary(
    root: Path | str,
    forbidden_prefixes: tuple[str, ...] = DEFAULT_FORBIDDEN_PREFIXES,
    root_package: str = "remote_support.core",
) -> list[BoundaryViolation]:
    root_path = Path(root)
    violations: list[BoundaryViolation] = []

    for py_file in sorted(root_path.rglob("*.py")):
        try:
            tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
        except SyntaxError as exc:
            violations.append(BoundaryViolation(str(py_file), exc.lineno or 1, "", "syntax-error"))
            continue

        package = _package_of(py_file, root_path, root_package)
        for node in ast.walk(tree):
            for module in _imported_modules(node, package):
                for prefix in forbidden_prefixes:
                    if module == prefix or module.startswith(f"{prefix}."):
                        violations.append(BoundaryViolation(str(py_file), node.lineno, module, prefix))
                        break

    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description="Fail when the ticket core imports channel code")
    parser.add_argument("--root", default="remote_support/core", help="directory to scan")
    parser.add_argument("--package", default="remote_support.core", help="import path of --root")
    args = parser.parse_args()

    violations = scan_boundary(root=args.root, root_package=args.package)
    for item in violations:
        print(f"- {item.file}:{item.line} imports {item.module or '?'} ({item.rule})")
    if violations:
        print(f"core boundary check failed: {len(violations)} violation(s)")
        return 1

    print("core boundary check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
