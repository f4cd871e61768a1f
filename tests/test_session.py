from session import format_report, main, run_session, symbol_label


def test_run_session():
    report = run_session("aab")
    assert report.frequencies == {ord("a"): 2, ord("b"): 1}
    assert report.codes == {ord("b"): "0", ord("a"): "1"}
    assert report.encoded == "110"
    assert report.decoded == "aab"
    assert report.original_bits == 24
    assert report.encoded_bits == 3
    assert report.ratio == 3 / 24


def test_run_session_counts_utf8_bytes():
    # "€" is 3 bytes (E2 82 AC), "é" is 2 (C3 A9)
    report = run_session("€€é")
    assert report.original_bits == 8 * 8
    assert report.frequencies == {0xE2: 2, 0x82: 2, 0xAC: 2, 0xC3: 1, 0xA9: 1}
    assert sum(report.frequencies.values()) == 8
    assert report.decoded == "€€é"
    assert report.ratio == report.encoded_bits / 64


def test_run_session_empty():
    report = run_session("")
    assert report.frequencies == {}
    assert report.codes == {}
    assert report.encoded == ""
    assert report.decoded == ""
    assert report.ratio == 0.0


def test_symbol_label():
    assert symbol_label(ord("a")) == "'a'"
    assert symbol_label(0x0A) == "0x0A"
    assert symbol_label(0xE2) == "0xE2"


def test_format_report():
    text = format_report(run_session("aab"))
    assert "Frequency Table:" in text
    assert "'a': 2" in text
    assert "Character | Frequency | Huffman Code" in text
    assert "Encoded String: 110" in text
    assert "Decoded String: aab" in text
    assert "Original Size: 24 bits" in text
    assert "Encoded Size: 3 bits" in text
    assert "Compression Ratio: 12.50%" in text


def test_main_prints_report(capsys):
    assert main(["hello world"]) == 0
    out = capsys.readouterr().out
    assert "Original String: hello world" in out
    assert "Decoded String: hello world" in out


def test_main_non_ascii(capsys):
    assert main(["naïve"]) == 0
    out = capsys.readouterr().out
    assert "0xC3" in out
    assert "Original Size: 48 bits" in out
