"""
Dependency ordering for resource declarations.

Declarations name their dependencies by symbol. An engine may create
independent resources in parallel but must apply a resource only after all of
its dependencies, so ordering is a layered topological sort: wave 0 holds the
declarations with no dependencies, wave N those whose dependencies all sit in
earlier waves. Within a wave, declaration order is kept.
"""

from typing import Iterable, List, Sequence, TYPE_CHECKING

from ..core.exceptions import DependencyError

if TYPE_CHECKING:
    from .resources import ResourceDeclaration


def _check_references(declarations: Sequence['ResourceDeclaration']) -> None:
    symbols = [d.symbol for d in declarations]
    duplicates = sorted({s for s in symbols if symbols.count(s) > 1})
    if duplicates:
        raise DependencyError(f"Duplicate declaration symbols: {duplicates}")

    known = set(symbols)
    for declaration in declarations:
        missing = [dep for dep in declaration.depends_on if dep not in known]
        if missing:
            raise DependencyError(
                f"Depends on undeclared symbols {missing}",
                resource=declaration.symbol
            )


def deployment_waves(declarations: Iterable['ResourceDeclaration']) -> List[List['ResourceDeclaration']]:
    """
    Group declarations into dependency waves.

    Returns:
        List of waves; every declaration depends only on earlier waves.

    Raises:
        DependencyError: On unknown symbols, duplicate symbols, or a cycle
    """
    pending = list(declarations)
    _check_references(pending)

    placed: set[str] = set()
    waves: List[List['ResourceDeclaration']] = []

    while pending:
        wave = [d for d in pending if all(dep in placed for dep in d.depends_on)]
        if not wave:
            cycle = sorted(d.symbol for d in pending)
            raise DependencyError(f"Dependency cycle between {cycle}")
        waves.append(wave)
        placed.update(d.symbol for d in wave)
        pending = [d for d in pending if d.symbol not in placed]

    return waves


def deployment_order(declarations: Iterable['ResourceDeclaration']) -> List['ResourceDeclaration']:
    """Flatten deployment_waves() into one dependency-sorted list."""
    return [d for wave in deployment_waves(declarations) for d in wave]
