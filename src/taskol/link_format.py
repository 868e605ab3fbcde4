"""Link name templates.

A template is plain text with placeholders:

    :pabb:        project abbreviation
    :pname:       project display name
    :tname:       task display name
    :tdate:       task date as YYYYMMDD
    :tdate-:      task date as YYYY-MM-DD
    :tdate年月日:  task date as YYYY年MM月DD日

Date placeholders become empty when the task has no date.
"""

from datetime import date
from typing import Dict, Optional

from taskol.naming import ProjectIdentity, TaskIdentity


DEFAULT_FORMAT = ":tdate:_:pabb:_:tname:"

PLACEHOLDERS = (
    ':pabb:',
    ':pname:',
    ':tname:',
    ':tdate:',
    ':tdate-:',
    ':tdate年月日:',
)


def _date_values(task_date: Optional[date]) -> Dict[str, str]:
    if task_date is None:
        return {':tdate:': '', ':tdate-:': '', ':tdate年月日:': ''}

    y, m, d = task_date.year, task_date.month, task_date.day
    return {
        ':tdate:': f"{y:04d}{m:02d}{d:02d}",
        ':tdate-:': f"{y:04d}-{m:02d}-{d:02d}",
        ':tdate年月日:': f"{y:04d}年{m:02d}月{d:02d}日",
    }


def placeholder_values(project: ProjectIdentity, task: TaskIdentity) -> Dict[str, str]:
    """
    Map every placeholder to its replacement text.

    Insertion order is the substitution order used by format_link_name().
    """
    values = {
        ':pabb:': project.abbreviation,
        ':pname:': project.display_name,
        ':tname:': task.display_name,
    }
    values.update(_date_values(task.date))
    return values


def format_link_name(template: str, project: ProjectIdentity, task: TaskIdentity) -> str:
    """
    Build a link base name (no extension) from a template.

    Each placeholder is replaced everywhere it occurs. Replacement text is
    not escaped, so a field that itself contains a later placeholder will be
    substituted again.

    Args:
        template: Template string, e.g. ':tdate:_:pabb:_:tname:'
        project: Parsed project folder
        task: Parsed task folder

    Returns:
        Link base name

    Examples:
        >>> from datetime import date
        >>> format_link_name(':tdate:_:pabb:_:tname:',
        ...                  ProjectIdentity('ABC', 'ABC'),
        ...                  TaskIdentity('Design_Review', date(2023, 1, 5)))
        '20230105_ABC_Design_Review'
    """
    result = template
    for placeholder, value in placeholder_values(project, task).items():
        result = result.replace(placeholder, value)
    return result
