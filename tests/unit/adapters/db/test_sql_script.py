"""Unit tests for `stagehand.adapters.db.sql_script.split_statements`."""

import pytest

from stagehand.adapters.db.sql_script import split_statements


def test_splits_on_semicolons():
    """Each ``;`` ends a statement; the terminator is dropped."""
    script = "CREATE TABLE a (id INT);\nINSERT INTO a VALUES (1);\n"
    assert split_statements(script) == [
        "CREATE TABLE a (id INT)",
        "INSERT INTO a VALUES (1)",
    ]


def test_trailing_statement_without_semicolon():
    """The last statement does not need a terminator."""
    assert split_statements("SELECT 1;\nSELECT 2") == ["SELECT 1", "SELECT 2"]


@pytest.mark.parametrize("script", ["", "   \n\t", ";;;", "-- only a comment\n"])
def test_empty_scripts(script):
    """Blank input, bare terminators and comments yield no statements."""
    assert split_statements(script) == []


@pytest.mark.parametrize(
    "literal",
    [
        "'a;b'",
        '"a;b"',
        "`weird;name`",
        r"'it\'s; fine'",
        "'it''s; fine'",
    ],
)
def test_semicolons_inside_quotes_are_kept(literal):
    """Quoted text is copied through untouched, semicolons included."""
    script = f"INSERT INTO t VALUES ({literal}); SELECT 1;"
    assert split_statements(script) == [f"INSERT INTO t VALUES ({literal})", "SELECT 1"]


def test_line_comments_are_dropped():
    """``-- `` and ``#`` comments vanish, even when they contain ``;``."""
    script = (
        "-- header; with a semicolon\n"
        "CREATE TABLE a (id INT); # trailing; comment\n"
        "SELECT 1;\n"
    )
    assert split_statements(script) == ["CREATE TABLE a (id INT)", "SELECT 1"]


def test_double_dash_needs_whitespace():
    """``--`` not followed by whitespace is an operator, not a comment."""
    assert split_statements("SELECT 5--1;") == ["SELECT 5--1"]


def test_block_comments_are_dropped():
    """``/* */`` comments vanish, including multi-line ones."""
    script = "/* license;\n   header */\nSELECT /* inline; */ 1;"
    assert split_statements(script) == ["SELECT   1"]


def test_executable_comments_are_kept():
    """MySQL ``/*! ... */`` comments carry real SQL and stay in place."""
    script = "/*!40101 SET NAMES utf8mb4 */;\nSELECT 1;"
    assert split_statements(script) == ["/*!40101 SET NAMES utf8mb4 */", "SELECT 1"]


def test_comment_markers_inside_strings_are_literal():
    """``--``, ``#`` and ``/*`` inside strings are data."""
    script = "INSERT INTO t VALUES ('-- x', '# y', '/* z */');"
    assert split_statements(script) == ["INSERT INTO t VALUES ('-- x', '# y', '/* z */')"]


def test_typical_dump_header():
    """A mysqldump-style preamble splits into its statements."""
    script = """
        /*!40101 SET @OLD_CHARACTER_SET_CLIENT=@@CHARACTER_SET_CLIENT */;
        --
        -- Table structure for table `players`
        --
        DROP TABLE IF EXISTS `players`;
        CREATE TABLE `players` (
          `id` int NOT NULL AUTO_INCREMENT,
          `username` varchar(12) NOT NULL DEFAULT '',
          PRIMARY KEY (`id`)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
    """
    statements = split_statements(script)
    assert len(statements) == 3
    assert statements[1] == "DROP TABLE IF EXISTS `players`"
    assert statements[2].startswith("CREATE TABLE `players`")
    assert statements[2].endswith("DEFAULT CHARSET=utf8mb4")
