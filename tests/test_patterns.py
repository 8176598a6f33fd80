from hilo.analytics.patterns import find_patterns, top_pattern, occurrences, runs, longest_run

def test_runs():
    assert runs("HHHLL", k=3) == [(0,2,'H',3)]
    assert longest_run("HLLLHH") == 3
    assert longest_run("") == 0

def test_overlapping_count():
    assert occurrences("HHHH", "HH") == (3, 2)
    assert occurrences("HLHL", "LL") == (0, -1)

def test_repeated_pair_is_top():
    top = top_pattern("HHHLL")
    assert top.pattern == "HH" and top.count == 2 and top.last_index == 1
    assert all(m.count >= 2 for m in find_patterns("HHHLL"))

def test_tie_broken_by_highest_last_index():
    matches = find_patterns("LHLHL")
    assert [m.count for m in matches] == [2, 2, 2]
    assert matches[0].pattern == "HL" and matches[0].last_index == 3

def test_short_window():
    assert find_patterns("") == []
    assert find_patterns("H") == []
    assert top_pattern("HL") is None

def test_idempotent():
    w = "HLLHHLHLLHHLHHLL"
    assert find_patterns(w) == find_patterns(w)

def test_alignment():
    top = top_pattern("HHHLL")
    assert top.aligned("HHHLL")
    assert not top.aligned("LHH")
