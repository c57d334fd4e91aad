"""
Formal grammar for Atto route patterns.

Grammar Specification
=====================

<pattern>     ::= [ <methods> <ws>+ ] <body>
<methods>     ::= <method> ( <ws>* "|" <ws>* <method> )*
<method>      ::= [A-Za-z]+
<body>        ::= <item>*
<item>        ::= <static> | <param> | <optional> | <wildcard>
<static>      ::= any run of characters that does not start another item
<param>       ::= ":" <ident> [ "<" <constraint> ">" ]
<constraint>  ::= [^>]+                      (regular expression, no delimiters)
<optional>    ::= "[" <item>+ "]"
<wildcard>    ::= "*"
<ident>       ::= [A-Za-z][A-Za-z0-9_]*

The method prefix is only recognised when it is followed by whitespace and
then by "/", "*" or "[". A ":" that is not followed by a letter, and a "<"
without a closing ">", are plain text.

Semantics
=========
- Parameters without a constraint match ``[^/]+``.
- Constraints are route-wide: declaring ``:id<\\d+>`` once constrains every
  ``:id`` in the pattern. The last declaration wins.
- Optional groups nest without limit. Assembly resolves them innermost
  first; a group with a missing parameter collapses to nothing, a group
  with a value rejected by its constraint is an error.
- ``*`` matches anything, slashes included, and assembles to nothing.

Pattern Examples
================
/contact
/help/:subject
/blog[/:page<\\d+>]
/blog/:slug<[a-z\\-]+>[/comments/:page<\\d+>]
/foo[/:bar[/:baz]]
POST|DELETE /blog/:id<\\d+>
/assets/*
*
"""

import re

# Leading HTTP method list, e.g. "POST|DELETE "
METHODS_PREFIX_RE = re.compile(
    r"^\s*(?P<methods>[A-Za-z]+(?:\s*\|\s*[A-Za-z]+)*)\s+(?=[/*\[])"
)

IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
IDENT_CHARS = IDENT_START | frozenset("0123456789_")

# Constraint used for parameters that do not declare one
DEFAULT_CONSTRAINT = r"[^/]+"

# Regex fragment a wildcard compiles to
WILDCARD_REGEX = r".*"
