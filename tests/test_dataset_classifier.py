import json

import pytest

from pipeline.dataset_classifier import (
    ClassificationResult,
    classify_dataset,
    classify_path,
    classify_source,
)
from pipeline.dataset_source import DatasetSource
from pipeline.errors import ReadError
from pipeline.scoring import LEGACY

KDD_CSV = (
    "duration,protocol_type,service,flag,src_bytes,dst_bytes,land,wrong_fragment,urgent\n"
    "0,tcp,http,SF,181,5450,0,0,0\n"
    "0,tcp,http,SF,239,486,0,0,0\n"
)

PEOPLE_CSV = (
    "name,age,city,salary\n"
    "alice,thirty,paris,high\n"
    "bob,forty,rome,low\n"
)

NESTED_JSON = json.dumps({
    "metadata": {"source": "capture"},
    "records": [
        {"src_bytes": 500, "flag": "S0", "service": "http"},
        {"src_bytes": 0, "flag": "SF", "service": "ftp"},
    ],
})


# ---------------- DatasetSource ----------------
@pytest.mark.parametrize("name,ext", [
    ("Data.CSV", "csv"),
    ("capture.tar.json", "json"),
    ("noextension", ""),
])
def test_source_extension(name, ext):
    assert DatasetSource(name=name, content=b"").extension == ext


def test_source_text_strips_bom_and_replaces_bad_bytes():
    source = DatasetSource(name="a.csv", content=b"\xef\xbb\xbfa,b\n\xff,2\n")
    assert source.text() == "a,b\n\ufffd,2\n"
    assert source.byte_length == 11


def test_source_from_missing_path(tmp_path):
    with pytest.raises(ReadError):
        DatasetSource.from_path(tmp_path / "missing.csv")


# ---------------- Scenarios ----------------
def test_kdd_headers_are_accepted():
    result = classify_dataset(KDD_CSV.encode(), "kdd.csv")

    assert len(result.matched_keywords) >= 8
    assert {"duration", "src_bytes", "dst_bytes", "wrong_fragment"} <= result.matched_keywords
    assert result.debug_info["keyword_confidence"] == 0.95
    assert result.debug_info["threshold"] == 0.75
    # port-number evidence from the byte counts
    assert "pattern_1" in result.matched_patterns
    assert result.confidence == pytest.approx(0.95 * 0.7 + 0.7 * 0.3)
    assert result.is_cybersecurity_related is True


def test_kdd_headers_alone_fall_short_without_patterns():
    # 0.95 * 0.7 = 0.665 is below the 0.75 threshold
    content = (
        "duration,protocol_type,service,flag,src_bytes,dst_bytes,land,wrong_fragment,urgent\n"
        "zero,x,y,z,a,b,c,d,e\n"
    )
    result = classify_dataset(content, "kdd.csv")
    assert result.matched_patterns == frozenset()
    assert result.confidence == pytest.approx(0.665)
    assert result.is_cybersecurity_related is False


def test_unrelated_csv_is_rejected():
    result = classify_dataset(PEOPLE_CSV.encode(), "people.csv")

    assert result.matched_keywords == frozenset()
    assert result.matched_patterns == frozenset()
    assert result.confidence == 0.0
    assert result.is_cybersecurity_related is False


def test_nested_json_confidence():
    result = classify_dataset(NESTED_JSON.encode(), "capture.json")

    assert result.debug_info["file_type"] == "JSON"
    assert result.debug_info["analyzed_headers"] == ("src_bytes", "flag", "service")
    assert result.matched_keywords == frozenset({"src_bytes", "flag", "service", "http", "ftp"})
    assert result.matched_patterns == frozenset({"pattern_1"})
    # 5 keywords -> 0.9, 1 pattern -> 0.7, threshold 0.78
    assert result.confidence == pytest.approx(0.9 * 0.7 + 0.7 * 0.3)
    assert result.debug_info["threshold"] == 0.78
    assert result.is_cybersecurity_related is True


def test_nested_json_legacy_calibration():
    result = classify_dataset(NESTED_JSON.encode(), "capture.json", calibration=LEGACY)

    assert result.confidence == pytest.approx(0.95 * 0.7 + 0.7 * 0.3)
    assert result.debug_info["threshold"] == 0.80
    assert result.debug_info["calibration"] == "legacy"
    assert result.is_cybersecurity_related is True


@pytest.mark.parametrize("src_bytes,expected_conf,expected_verdict", [
    ("small", 0.85 * 0.7, False),
    (500, 0.85 * 0.7 + 0.7 * 0.3, True),
])
def test_three_keyword_boundary(src_bytes, expected_conf, expected_verdict):
    content = json.dumps({"records": [{"src_bytes": src_bytes, "flag": "a", "service": "b"}]})
    result = classify_dataset(content, "records.json")

    assert len(result.matched_keywords) == 3
    assert result.debug_info["threshold"] == 0.80
    assert result.confidence == pytest.approx(expected_conf)
    assert result.is_cybersecurity_related is expected_verdict


def test_malformed_json_gives_conservative_result():
    result = classify_dataset(b"{not json", "broken.json")

    assert result.is_cybersecurity_related is False
    assert result.confidence == 0.0
    assert result.matched_keywords == frozenset()
    assert result.matched_patterns == frozenset()
    assert "Invalid JSON" in result.debug_info["error"]
    assert result.debug_info["error_type"] == "FormatError"


def test_missing_content_gives_conservative_result():
    result = classify_dataset(None, "empty.csv")
    assert result.is_cybersecurity_related is False
    assert result.debug_info["error_type"] == "ReadError"


def test_unreadable_path_gives_conservative_result(tmp_path):
    result = classify_path(tmp_path / "gone.csv")
    assert result.is_cybersecurity_related is False
    assert result.confidence == 0.0
    assert result.debug_info["error_type"] == "ReadError"


def test_classify_path(tmp_path):
    p = tmp_path / "kdd.csv"
    p.write_text(KDD_CSV)
    result = classify_path(p)
    assert result.is_cybersecurity_related is True
    assert result.debug_info["filename"] == "kdd.csv"
    assert result.debug_info["file_size"] == len(KDD_CSV)


def test_text_content_is_accepted():
    assert classify_dataset(KDD_CSV, "kdd.csv").is_cybersecurity_related is True


def test_unknown_extension_is_parsed_as_csv():
    result = classify_dataset(KDD_CSV.encode(), "kdd.txt")
    assert result.debug_info["file_type"] == "CSV"
    assert result.is_cybersecurity_related is True


def test_row_cap_is_reported():
    content = "src_ip,dst_port\n" + "\n".join(f"10.0.0.{i % 250},80" for i in range(500))
    result = classify_dataset(content, "flows.csv", max_rows=200)
    assert result.debug_info["sample_row_count"] == 200


# ---------------- Properties ----------------
@pytest.mark.parametrize("content,name", [
    (KDD_CSV, "kdd.csv"),
    (PEOPLE_CSV, "people.csv"),
    (NESTED_JSON, "capture.json"),
    ("", "empty.csv"),
    ("{", "broken.json"),
    ("ip,port,mac\n10.0.0.1,443,00:1a:2b:3c:4d:5e\n", "net.csv"),
])
def test_confidence_bounds_and_idempotence(content, name):
    first = classify_dataset(content, name)
    second = classify_dataset(content, name)

    assert 0.0 <= first.confidence <= 1.0
    assert first.confidence == second.confidence
    assert first.is_cybersecurity_related == second.is_cybersecurity_related
    assert first.matched_keywords == second.matched_keywords
    assert first.matched_patterns == second.matched_patterns


def test_result_is_immutable():
    result = classify_dataset(KDD_CSV, "kdd.csv")

    with pytest.raises(AttributeError):
        result.confidence = 1.0
    with pytest.raises(TypeError):
        result.debug_info["threshold"] = 0.0


def test_to_dict_sorts_evidence():
    result = ClassificationResult(
        is_cybersecurity_related=True,
        confidence=0.9,
        matched_keywords=frozenset({"tcp", "attack"}),
        matched_patterns=frozenset({"pattern_10", "pattern_2"}),
    )
    out = result.to_dict()
    assert out["matched_keywords"] == ["attack", "tcp"]
    assert out["matched_patterns"] == ["pattern_2", "pattern_10"]
    assert out["debug_info"] == {}


def test_classify_source_directly():
    source = DatasetSource(name="kdd.csv", content=KDD_CSV.encode())
    assert classify_source(source).is_cybersecurity_related is True


def test_deeply_nested_json_gives_conservative_result():
    result = classify_dataset("[" * 100000 + "]" * 100000, "deep.json")

    assert result.is_cybersecurity_related is False
    assert result.confidence == 0.0
    assert result.debug_info["error_type"] == "FormatError"
    assert "nesting depth" in result.debug_info["error"]


def test_nan_in_json_gives_conservative_result():
    result = classify_dataset('[{"attack": NaN}]', "nan.json")

    assert result.is_cybersecurity_related is False
    assert result.confidence == 0.0
    assert result.matched_keywords == frozenset()
    assert result.debug_info["error_type"] == "FormatError"


def test_debug_headers_cannot_be_mutated():
    result = classify_dataset(NESTED_JSON, "capture.json")

    with pytest.raises(AttributeError):
        result.debug_info["analyzed_headers"].append("injected")
    assert result.debug_info["analyzed_headers"] == ("src_bytes", "flag", "service")
