"""Wisp recursive-descent parser. Builds a syntax tree (see wisp/grammar/tree.py) from program text.

Formally, Wisp grammar can be defined as

```
<expr>        ::= (<string> | <number> | <word>) <apply-suffix>
<apply-suffix> ::= "(" [<expr> {"," <expr>}] ")" <apply-suffix>  ; chained: f(a)(b) = (f(a))(b)
                 | ""
<string>      ::= '"' <any char but '"'>* '"'                   ; no escapes
<number>      ::= <digit>+                                       ; must end at a word boundary
<word>        ::= <any char but whitespace, "(", ")", ",", "#", '"'>+
<comment>     ::= "#" <any char but newline>*                    ; skipped along with whitespace
```

The parser works on offsets into the program text rather than on slices of it, so errors can point at the exact
position that could not be parsed.
"""

import re

from wisp.grammar.tree import Application, Identifier, Literal
from wisp.lang.error import WispSyntaxError


SPACE = re.compile(r"(?:\s|#.*)*")
STRING = re.compile(r'"([^"]*)"')
NUMBER = re.compile(r"\d+\b", re.ASCII)
WORD = re.compile(r'[^\s(),#"]+')


def skip_space(text, pos=0):
    """Returns the position of the first character at or after pos that is not whitespace or part of a comment."""
    return SPACE.match(text, pos).end()


def parse_expression(text, pos=0):
    """Parses the expression starting at pos. Returns (expression, position after it)."""
    pos = skip_space(text, pos)

    match = STRING.match(text, pos)
    if match:
        expr = Literal(match.group(1), start=pos, end=match.end())
    elif NUMBER.match(text, pos):
        match = NUMBER.match(text, pos)
        expr = Literal(int(match.group()), start=pos, end=match.end())
    elif WORD.match(text, pos):
        match = WORD.match(text, pos)
        expr = Identifier(match.group(), start=pos, end=match.end())
    elif pos == len(text):
        raise WispSyntaxError("unexpected end of input", start=pos)
    else:
        snippet = text[pos:].split("\n", 1)[0]
        raise WispSyntaxError("unexpected syntax: '{}'", snippet, start=pos, end=pos + 1)

    return parse_apply(expr, text, match.end())


def parse_apply(expr, text, pos):
    """If expr is followed by an argument list, parses it into an Application (repeatedly, for chained calls). Returns
    (expression, position after it).
    """
    pos = skip_space(text, pos)
    if text[pos:pos + 1] != "(":
        return expr, pos

    pos = skip_space(text, pos + 1)
    args = []
    while text[pos:pos + 1] != ")":
        arg, pos = parse_expression(text, pos)
        args.append(arg)

        pos = skip_space(text, pos)
        if text[pos:pos + 1] == ",":
            pos = skip_space(text, pos + 1)
            if text[pos:pos + 1] == ")":
                raise WispSyntaxError("expected expression after ','", start=pos, end=pos + 1)
        elif pos == len(text):
            raise WispSyntaxError("unexpected end of input, expected ',' or ')'", start=pos)
        elif text[pos] != ")":
            raise WispSyntaxError("expected ',' or ')'", start=pos, end=pos + 1)

    return parse_apply(Application(expr, args, start=expr.start, end=pos + 1), text, pos + 1)


def parse(text):
    """Parses text, which must contain exactly one expression (plus whitespace and comments)."""
    expr, pos = parse_expression(text)
    pos = skip_space(text, pos)
    if pos != len(text):
        raise WispSyntaxError("unexpected text after program", start=pos, end=len(text))
    return expr
