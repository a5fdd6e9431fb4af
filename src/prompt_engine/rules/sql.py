"""
SQL and database design rules.
"""

from ..domains import Domain, Template
from ..models import Severity
from .base import (
    AntiPattern,
    ChecklistField,
    DomainRules,
    EnhancementRule,
    ExamplePair,
    OverlaySection,
    Replacement,
    keywords,
    vocab,
)

SQL_RULES = DomainRules(
    domain=Domain.SQL,
    description="SQL queries, schema design and database performance",
    persona="You are a senior database engineer who writes correct, index-aware SQL.",
    persona_title="a senior database engineer",
    default_template=Template.CHAIN_OF_THOUGHT,
    output_format="Return the SQL in a fenced code block, followed by one sentence per clause explaining the logic.",
    preferred_verb="Write",
    keywords=keywords(
        (r"sql", 3.0),
        (r"quer(?:y|ies)", 2.0),
        (r"select", 2.0),
        (r"join(?:s|ed)?", 2.0),
        (r"schemas?", 2.0),
        (r"database(?:s)?", 2.0),
        (r"tables?", 1.0),
        (r"postgres(?:ql)?|mysql|sqlite|mariadb|oracle db|sql server", 3.0),
        (r"index(?:es|ing)?", 1.5),
        (r"foreign key|primary key", 2.0),
        (r"stored procedures?|views?", 1.0),
        (r"tabla|consulta|base de datos", 2.0),
    ),
    vocabulary=vocab(
        "sql", "query", "select", "join", "schema", "table", "column", "row",
        "index", "constraint", "key", "foreign", "primary", "transaction",
        "postgresql", "mysql", "sqlite", "ansi", "dialect", "aggregate",
        "cte", "view", "partition", "normalization", "migration", "users",
        "orders", "products", "timestamp", "null", "scan", "plan",
    ),
    replacements=(
        Replacement(r"bonit[oa]s?\s+(?:tabla|table)s?", "well-structured, normalized database table",
                    "Replace vague table wording"),
        Replacement(r"buen[oa]s?\s+(?:query|consulta)", "optimized SQL query with proper indexing",
                    "Clarify what makes a query well built"),
        Replacement(r"fast\s+query", "performance-optimized query with appropriate indexes",
                    "Specify how to achieve query performance"),
        Replacement(r"base\s+de\s+datos|\bbd", "relational database", "Use English database terminology"),
        Replacement(r"consulta", "query", "Use English database terminology"),
        Replacement(r"tabla", "table", "Use English database terminology"),
    ),
    overlay_sections=(
        OverlaySection("Dialect", "Target PostgreSQL 15 with ANSI SQL syntax unless another engine is named."),
        OverlaySection("Schema assumptions", "State every table, column and key the query relies on before writing SQL."),
        OverlaySection("Performance constraints", "Use indexed columns in JOIN and WHERE clauses and avoid full table scans on tables above 1 million rows."),
    ),
    enhancements=(
        EnhancementRule(r"tables?|schemas?", "Include data types, NOT NULL constraints and foreign key relationships"),
        EnhancementRule(r"quer(?:y|ies)|select", "Consider query performance with a proper indexing strategy"),
        EnhancementRule(r"migrations?|update", "Include a rollback strategy and data safety checks"),
        EnhancementRule(r"analytics|reports?", "Consider aggregation cost and materialized views"),
        EnhancementRule(r"joins?|relationships?|foreign", "Include foreign key constraints and relationship definitions"),
    ),
    checklist=(
        ChecklistField("dialect", r"^Dialect:|\b(?:postgres(?:ql)?|mysql|sqlite|sql server|oracle|ansi sql)\b",
                       "Target SQL dialect"),
        ChecklistField("schema", r"^Schema assumptions:|\b(?:schema|tables?|columns?)\b", "Schema assumptions"),
        ChecklistField("performance", r"^Performance constraints:|\bindex(?:es|ing)?\b|\bperformance\b",
                       "Performance constraints"),
    ),
    constraints=(
        "List every column explicitly in the final SELECT clause.",
        "Return at most 1000 rows unless the task specifies a limit.",
    ),
    success_criteria=(
        "The query runs without errors on PostgreSQL 15.",
        "The EXPLAIN plan uses an index scan on every filtered column.",
    ),
    default_requirements=(
        "Name every table and column used by the query",
        "Handle NULL values explicitly",
    ),
    reasoning_steps=(
        "Identify the tables, columns and keys involved.",
        "Define the JOIN path and the filter conditions.",
        "Choose indexes that support every filter and JOIN.",
        "Write the SQL and check the result set against the requirements.",
    ),
    examples=(
        ExamplePair(
            input="get users who ordered last month",
            output="SELECT u.id, u.email FROM users u JOIN orders o ON o.user_id = u.id "
                   "WHERE o.created_at >= date_trunc('month', now()) - interval '1 month';",
        ),
        ExamplePair(
            input="make a products table",
            output="CREATE TABLE products (id BIGSERIAL PRIMARY KEY, name TEXT NOT NULL, "
                   "price_cents INTEGER NOT NULL CHECK (price_cents >= 0));",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="SQL_MISSING_DIALECT",
            category="missing-dialect",
            severity=Severity.MEDIUM,
            message="SQL request does not name a target dialect or engine.",
            pattern=r"\b(?:postgres(?:ql)?|mysql|sqlite|sql server|oracle|ansi|dialect|mariadb)\b",
            mode="absent",
        ),
        AntiPattern(
            code="SQL_SELECT_STAR",
            category="anti-pattern",
            severity=Severity.LOW,
            message="Avoid SELECT * in production queries; list the columns explicitly.",
            pattern=r"\bselect\s+\*",
        ),
        AntiPattern(
            code="SQL_MISSING_SPECIFICS",
            category="missing-context",
            severity=Severity.LOW,
            message="SQL request may need more specific table or column details.",
            pattern=r"\b(?:tables?|columns?|schema)\b",
            mode="absent",
        ),
    ),
)
