from commitgpt.utils import label, labels


def test_label_is_first_line():
    assert label("feat: add x\n\nbody text") == "feat: add x"


def test_label_without_line_break_is_whole_text():
    assert label("fix: single line") == "fix: single line"


def test_label_drops_carriage_return():
    assert label("feat: windows\r\nbody") == "feat: windows"


def test_label_of_leading_newline_is_empty():
    assert label("\nfeat: late") == ""


def test_labels_keep_candidate_order():
    assert labels(["b: 2\nx", "a: 1"]) == ["b: 2", "a: 1"]
