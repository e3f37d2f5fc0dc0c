from src.intern_attendance.intern_attendance.database.bootstrap import (
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); CREATE TABLE x (id INT);"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "CREATE TABLE x (id INT)"]


def test_schema_prelude_is_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\n-- comment; with semicolon\nCREATE TABLE a (id INT);\n"
    cleaned = _strip_line_comments(_strip_create_db_and_use(sql))
    assert list(iter_sql_statements(cleaned)) == ["CREATE TABLE a (id INT)"]
