"""Tests for link_format.py - template substitution."""

import pytest
from datetime import date

from taskol.link_format import DEFAULT_FORMAT, PLACEHOLDERS, format_link_name, placeholder_values
from taskol.naming import ProjectIdentity, TaskIdentity


@pytest.fixture
def project():
    return ProjectIdentity(abbreviation="ABC", display_name="案件名")


@pytest.fixture
def dated_task():
    return TaskIdentity(display_name="Design_Review", date=date(2023, 1, 5))


@pytest.fixture
def undated_task():
    return TaskIdentity(display_name="Design_Review", date=None)


class TestFormatLinkName:

    def test_default_template(self, project, dated_task):
        assert format_link_name(DEFAULT_FORMAT, project, dated_task) == "20230105_ABC_Design_Review"

    def test_default_template_without_date(self, project, undated_task):
        """Empty date segment, separators stay."""
        assert format_link_name(":tdate:_:pabb:_:tname:", project, undated_task) == "_ABC_Design_Review"

    def test_project_name(self, project, dated_task):
        assert format_link_name(":pname: - :tname:", project, dated_task) == "案件名 - Design_Review"

    def test_hyphenated_date(self, project, dated_task):
        assert format_link_name(":tdate-: :tname:", project, dated_task) == "2023-01-05 Design_Review"

    def test_kanji_date(self, project, dated_task):
        assert format_link_name(":tdate年月日:_:tname:", project, dated_task) == "2023年01月05日_Design_Review"

    def test_all_date_placeholders_empty_without_date(self, project, undated_task):
        assert format_link_name("[:tdate:][:tdate-:][:tdate年月日:]", project, undated_task) == "[][][]"

    def test_zero_padding(self, project):
        task = TaskIdentity("x", date(987, 2, 3))
        assert format_link_name(":tdate:|:tdate-:", project, task) == "09870203|0987-02-03"

    def test_replaces_every_occurrence(self, project, dated_task):
        assert format_link_name(":pabb:/:pabb:/:pabb:", project, dated_task) == "ABC/ABC/ABC"

    def test_unknown_placeholder_left_alone(self, project, dated_task):
        assert format_link_name(":tname:_:owner:", project, dated_task) == "Design_Review_:owner:"

    def test_template_without_placeholders(self, project, dated_task):
        assert format_link_name("static", project, dated_task) == "static"

    def test_repeatable(self, project, undated_task):
        first = format_link_name(DEFAULT_FORMAT, project, undated_task)
        assert format_link_name(DEFAULT_FORMAT, project, undated_task) == first

    def test_field_text_is_not_escaped(self, dated_task):
        """A project field containing a later placeholder is substituted again."""
        project = ProjectIdentity(abbreviation=":tname:", display_name="P")
        assert format_link_name(":pabb:", project, dated_task) == "Design_Review"

    def test_task_field_is_not_resubstituted_by_earlier_placeholder(self, dated_task):
        """:pabb: is replaced before :tname:, so a task name holding ':pabb:' survives."""
        project = ProjectIdentity("ABC", "P")
        task = TaskIdentity(":pabb:", None)
        assert format_link_name(":tname:", project, task) == ":pabb:"


class TestPlaceholderValues:

    def test_covers_every_placeholder(self, project, dated_task):
        values = placeholder_values(project, dated_task)
        assert tuple(values) == PLACEHOLDERS

    def test_substitution_order(self, project, undated_task):
        assert list(placeholder_values(project, undated_task))[:3] == [':pabb:', ':pname:', ':tname:']
