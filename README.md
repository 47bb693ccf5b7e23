# backrefmatch

A small regular-expression engine that decides whether a pattern matches a
whole string. It supports back-references to capturing groups (`\1`, `\2`,
...). The package also builds suffix arrays of sentinel-terminated texts and
generalized suffix arrays of collections of texts.

## Supported syntax

- literals, `.` (any character except newline), alternation `|`, grouping `( )`,
  non-capturing groups `(?: )`
- repetition `*`, `+`, `?`
- character classes `[a-z]`, negation `[^...]`, intersection `[a-z&&[^aeiou]]`,
  and `\s \S \w \W \d` inside brackets
- escapes `\s \S \w \W \d \n \t \r \v \f` and escaped metacharacters
- back-references `\1`, `\2`, ...
- a leading `^` and a trailing `$`. A match must always cover the whole text.
- look-around syntax `(?=...)`, `(?!...)`, `(?<=...)` and `(?<!...)` is parsed,
  but the matcher does not evaluate these assertions.

Characters of the text must lie in the range 0–255. A malformed pattern raises
`backrefmatch.parser.ParseError`, which is a subclass of
`backrefmatch.regex.RegexError` and of `ValueError`.

## Command line

```
backrefmatch PATTERN TEXT
```

The first line of output is `1` if PATTERN matches the whole of TEXT and `0` if
it does not. The second line gives the processor time of the match in
milliseconds and the change in resident memory in megabytes. Memory is read
from `/proc`, and is reported as 0 where `/proc` is not available. A bad
pattern prints an error to standard error, and the command exits with status 1.

## Library use

```python
from backrefmatch.production import match

match(r"(a|b)\1", "aa")   # True
match(r"(a|b)\1", "ab")   # False
```

- `backrefmatch.parser.Parser(pattern)` parses a pattern into an NFA. The
  expression is available as `.re` or from `.parse()`.
- `backrefmatch.production.ProductionFA(pattern, text)` runs the match. The
  answer is in `.result`.
- `backrefmatch.construct.ConstructMatcher` searches a graph of position edges
  for a path that covers the whole text. It records the answer in `.is_match`.

### Suffix arrays

```python
from backrefmatch.suffix_array import sacak, sacak_int
from backrefmatch.generalized import gsacak_sa, gsacak_da

sacak(b"banana\x00")                  # suffix array as a list of positions
sacak_int([2, 1, 3, 0], k=4)          # integer alphabet 0..k-1
gsacak_sa(b"ab\x01b\x01\x00")         # texts joined by 1, ended by 0
gsacak_da(b"ab\x01b\x01\x00")         # GeneralizedSuffixArray with document_array
```

- `sacak` and `sacak_int` take a text whose last symbol is the sentinel 0,
  which must not occur anywhere else.
- The generalized functions take texts that are each closed by the separator
  1, followed by the sentinel 0.
- In the generalized suffix array, each separator sorts below every other
  symbol and below every later separator.
- `GeneralizedSuffixArray` exposes `suffix_array`, `document_array`, `documents`
  and `suffix(rank)`.
- Invalid input raises `ValueError`.

## Not included

The package does not compute LCP arrays. The `lcp_array` field of
`GeneralizedSuffixArray` is always `None`.

## Installing and testing

```
pip install .
pip install .[test]
pytest
```