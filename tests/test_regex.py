import pytest

from backrefmatch.regex import (
    UNBOUNDED,
    AnyChar,
    Blank,
    Choice,
    LookAround,
    LookAroundState,
    MultiChoice,
    NFAState,
    NodeType,
    PlusRepetition,
    Prefix,
    Primitives,
    QuoraRepetition,
    Refer,
    RegexError,
    ScaleState,
    Sequence,
    SpecialChars,
    StarRepetition,
    Suffix,
)


def _grouped(ch, refer_no=0):
    r = Primitives(ch)
    r.set_group_state(True, False, refer_no)
    return r


def test_state_ids_increase():
    a = NFAState(NodeType.BLANK)
    b = NFAState(NodeType.BLANK)
    assert b.id > a.id


def test_primitive_single_state():
    p = Primitives("a")
    assert p.start.kind == NodeType.LITERAL
    assert p.start.char == ord("a")
    assert p.out1 == [p.start]
    assert (p.min_len, p.max_len) == (1, 1)
    assert str(p) == "Primitives:a"


def test_blank_and_anychar():
    b = Blank()
    assert b.start.kind == NodeType.BLANK
    assert str(b) == "Blank"
    a = AnyChar()
    assert a.start.kind == NodeType.ANY_CHAR
    assert str(a) == "[AnyCharacter]"
    assert a.copy().start is not a.start


def test_refer_state_and_copy_fails():
    r = Refer()
    assert r.start.kind == NodeType.REFER_START
    assert str(r) == ""
    with pytest.raises(RegexError):
        r.copy()


def test_sequence_links_fragments():
    a, b = Primitives("a"), Primitives("b")
    s = Sequence(a, b)
    assert s.start is a.start
    assert a.start.out1 is b.start
    assert b.start.reverse_out == [a.start]
    assert s.out1 is b.out1
    assert s.min_len == a.min_len + b.min_len
    assert str(s) == "[Primitives:a+Primitives:b]"


def test_choice_splits():
    a, b = Primitives("a"), Primitives("b")
    c = Choice(a, b)
    assert c.start.kind == NodeType.SPLIT
    assert c.start.out1 is a.start
    assert c.start.out2 is b.start
    assert set(c.out1) == {a.start, b.start}
    assert str(c) == "[choice inPrimitives:a and Primitives:b]"


def test_star_plain_loops_back():
    a = Primitives("a")
    st = StarRepetition(a)
    assert st.start.kind == NodeType.SPLIT
    assert st.start.out1 is a.start
    assert a.start.out1 is st.start
    assert st.out2 == [st.start]
    assert st.out1 == []


def test_plus_plain_loops_back():
    a = Primitives("a")
    p = PlusRepetition(a)
    assert p.start is a.start
    split = a.start.out1
    assert split.kind == NodeType.SPLIT
    assert split.out1 is a.start
    assert p.out2 == [split]
    assert p.min_len == a.min_len
    assert p.max_len == UNBOUNDED


def test_quora_plain():
    a = Primitives("a")
    q = QuoraRepetition(a)
    assert q.start.kind == NodeType.SPLIT
    assert q.start.out1 is a.start
    assert q.start in q.out2
    assert q.min_len == 0
    assert q.max_len == a.max_len


def test_sequence_unbounded_propagates():
    s = Sequence(PlusRepetition(Primitives("a")), Primitives("b"))
    assert s.max_len == UNBOUNDED


def test_set_group_state_group():
    r = Primitives("x")
    old = r.start
    r.set_group_state(True, False, 3)
    assert r.start.kind == NodeType.GROUP_START
    assert r.start.out1 is old
    assert r.start.refer_no == 3
    end = r.out1[0]
    assert end.kind == NodeType.GROUP_END
    assert end.refer_no == 3
    assert old.out1 is end
    assert r.old_out1 == [old]
    assert r.out2 == []


def test_set_group_state_reference_and_none():
    r = Primitives("x")
    r.set_group_state(False, True, 1)
    assert r.start.kind == NodeType.REFER_START
    assert r.out1[0].kind == NodeType.REFER_END
    plain = Primitives("y")
    before = plain.start
    plain.set_group_state(False, False, 1)
    assert plain.start is before


def test_star_of_group_builds_fresh_group_copy():
    r = _grouped("x", 2)
    old_body = r.start.out1
    st = StarRepetition(r)
    assert st.start.kind == NodeType.SPLIT
    gs = st.start.out2
    assert gs.kind == NodeType.GROUP_START
    assert gs.out1 is not old_body
    assert gs.out1.char == ord("x")
    end = st.out1[0]
    assert end.kind == NodeType.GROUP_END
    assert gs.out2 is end
    assert gs.refer_no == end.refer_no == 2


def test_plus_of_group_requires_one_copy():
    r = _grouped("x")
    p = PlusRepetition(r)
    gs = p.start.out2
    assert gs.kind == NodeType.GROUP_START
    assert gs.out2 is None
    assert gs.out1.out1 is p.out1[0]


def test_quora_of_group_can_skip():
    r = _grouped("x")
    q = QuoraRepetition(r)
    assert q.start.out2 is r.out1[0]
    assert q.start.kind == NodeType.GROUP_START


def test_star_of_refer_raises():
    with pytest.raises(RegexError):
        StarRepetition(Refer())


def test_multichoice_range_membership():
    mc = MultiChoice("a", "c")
    mc.generate_nfa()
    assert isinstance(mc.start, ScaleState)
    assert "b" in mc.start
    assert "a" in mc.start and "c" in mc.start
    assert "d" not in mc.start
    assert mc.out1 == [mc.start]


def test_multichoice_reverse_and_ops():
    mc = MultiChoice("a", "c")
    mc.reverse()
    mc.generate_nfa()
    assert "b" not in mc.start
    assert "z" in mc.start
    union = MultiChoice("0", "9")
    union.or_op(MultiChoice("a", "z"))
    union.and_op(MultiChoice("a", "f"))
    union.generate_nfa()
    assert "e" in union.start
    assert "5" not in union.start
    assert "g" not in union.start


@pytest.mark.parametrize("low, high", [(-1, 5), (0, 256)])
def test_multichoice_out_of_range(low, high):
    with pytest.raises(RegexError):
        MultiChoice(low, high)


def test_multichoice_copy_independent():
    mc = MultiChoice("a", "c")
    mc.generate_nfa()
    dup = mc.copy()
    mc.reverse()
    assert dup.start is not mc.start
    assert "b" in dup.start
    assert str(dup) == "[MultiChoice]"


@pytest.mark.parametrize(
    "special, kind, char",
    [
        ("n", NodeType.LITERAL, ord("\n")),
        ("t", NodeType.LITERAL, ord("\t")),
        ("d", NodeType.DIGIT, None),
        ("w", NodeType.WORD, None),
        ("s", NodeType.SINGLE_LETTER, None),
        ("*", NodeType.LITERAL, ord("*")),
    ],
)
def test_special_chars(special, kind, char):
    sc = SpecialChars(special)
    assert sc.start.kind == kind
    assert sc.start.char == char


def test_lookaround_state():
    inner = Primitives("a")
    la = LookAround(inner, True, False, has_refer=True)
    state = la.start
    assert isinstance(state, LookAroundState)
    assert state.kind == NodeType.LOOK_AROUND
    assert state.ahead is True
    assert state.positive is False
    assert state.has_refer is True
    assert state.inner_start is inner.start
    assert inner.start.out1 is state.match_state
    assert state.match_state.kind == NodeType.MATCH
    assert la.out1 == [state]
    assert str(la) == "[LookAround]"


def test_sequence_copy_is_fresh():
    s = Sequence(Primitives("a"), Primitives("b"))
    dup = s.copy()
    assert dup.start is not s.start
    assert dup.start.char == ord("a")
    assert dup.start.out1.char == ord("b")
    assert str(dup) == str(s)


def test_suffix_and_prefix():
    sfx = Suffix(Primitives("a"))
    assert str(sfx.copy()) == "[Suffix of Primitives:a]"
    pfx = Prefix(Primitives("a"))
    assert str(pfx) == "[Prefix of Primitives:a ]"
    with pytest.raises(RegexError):
        pfx.copy()