"""
Folder name parsing for taskol.

Turns raw project and task folder names into the fields used to build link
names: a project abbreviation and display name, and a task display name with
an optional date.

Folder names are split into components on ``_``, ``(`` and ``)``:

    ABC_Project Foo            -> ['ABC', 'Project Foo']
    t_20230105_Design_Review   -> ['20230105', 'Design', 'Review']
"""

from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Union
import re


# Separators between name components
COMPONENT_SEPARATOR = re.compile(r'_|\(|\)')

# year[2-4] month[2] day[2], hyphens optional; searched, not anchored
DATE_PATTERN = re.compile(r'([0-9]{2,4})-?([0-9]{2})-?([0-9]{2})')

ALNUM_PATTERN = re.compile(r'[0-9A-Za-z]')

TASK_PREFIX = 't_'


@dataclass(frozen=True)
class ProjectIdentity:
    """Abbreviation and display name derived from a project folder."""

    abbreviation: str = ""
    display_name: str = ""


@dataclass(frozen=True)
class TaskIdentity:
    """Display name and optional date derived from a task folder."""

    display_name: str = ""
    date: Optional[date] = None


def tokenize(name: str) -> List[str]:
    """
    Split a folder name into its non-empty components, in order.

    Args:
        name: Raw folder name (base name, not a path)

    Returns:
        List of components with empty strings discarded
    """
    return [c for c in COMPONENT_SEPARATOR.split(name) if c]


def _rolled_date(year: int, month: int, day: int) -> date:
    # Out-of-range months carry into the year, out-of-range days into the
    # month: 2023-13-05 -> 2024-01-05, 2023-02-30 -> 2023-03-02
    carry, month_index = divmod(month - 1, 12)
    return date(year + carry, month_index + 1, 1) + timedelta(days=day - 1)


def is_date_shaped(component: str) -> bool:
    """Check whether a component contains a date-shaped run of digits."""
    return DATE_PATTERN.search(component) is not None


def detect_date(component: str) -> Optional[date]:
    """
    Parse a date out of a single name component.

    Years below 100 are moved into the 2000s ('230105' -> 2023-01-05).
    Month and day values outside the calendar roll over into the following
    months, so '20231305' is 2024-01-05 and '20230230' is 2023-03-02.

    Args:
        component: One component produced by tokenize()

    Returns:
        The parsed date, or None if the component is not date-shaped or rolls
        past the last representable date

    Examples:
        >>> detect_date('2023-01-05')
        datetime.date(2023, 1, 5)
        >>> detect_date('abc') is None
        True
    """
    match = DATE_PATTERN.search(component)
    if not match:
        return None

    year, month, day = (int(g) for g in match.groups())
    if year < 100:
        year += 2000

    try:
        return _rolled_date(year, month, day)
    except (ValueError, OverflowError):
        return None


def _base_name(path: Union[str, Path]) -> str:
    return Path(path).name


def is_alnum_bearing(component: str) -> bool:
    """Check whether a component has at least one ASCII letter or digit."""
    return ALNUM_PATTERN.search(component) is not None


def parse_project_identity(path: Union[str, Path]) -> ProjectIdentity:
    """
    Derive abbreviation and display name from a project folder.

    Project folders mix a short code with a readable label in either order
    ('ABC_案件名' or '案件名_ABC'). The last alnum-bearing component becomes
    the abbreviation. The display name is the first alnum-bearing component,
    overridden by any component without letters or digits.

    Args:
        path: Project folder path or bare folder name

    Returns:
        ProjectIdentity (both fields empty if the name has no components)
    """
    abbreviation = ""
    display_name = ""

    for component in tokenize(_base_name(path)):
        if is_alnum_bearing(component):
            abbreviation = component
            if not display_name:
                display_name = component
        else:
            if not abbreviation:
                abbreviation = component
            display_name = component

    return ProjectIdentity(abbreviation=abbreviation, display_name=display_name)


def parse_task_identity(path: Union[str, Path]) -> TaskIdentity:
    """
    Derive display name and date from a task folder.

    The 't_' prefix is dropped, date components are pulled out (the last one
    wins) and the remaining components are re-joined with '_'.

    Args:
        path: Task folder path or bare folder name

    Returns:
        TaskIdentity with date None when no component is date-shaped

    Examples:
        >>> parse_task_identity('t_20230105_Design_Review')
        TaskIdentity(display_name='Design_Review', date=datetime.date(2023, 1, 5))
    """
    base = _base_name(path)
    if base.startswith(TASK_PREFIX):
        base = base[len(TASK_PREFIX):]

    name_parts: List[str] = []
    task_date: Optional[date] = None

    for component in tokenize(base):
        if not is_date_shaped(component):
            name_parts.append(component)
            continue
        parsed = detect_date(component)
        if parsed is not None:
            task_date = parsed

    return TaskIdentity(display_name='_'.join(name_parts), date=task_date)
