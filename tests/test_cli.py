import json

import pytest

from mpeg4desc.cli import main

# IPI pointer (es id 1) followed by a reserved-tag descriptor
HEX = "09020001" + "2003aabbcc"


def test_info_json(capsys):
    assert main(["info", "--hex", HEX]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [d["kind"] for d in out["descriptors"]] == ["ipi_pointer", "opaque"]
    assert out["descriptors"][1]["data"] == "aabbcc"


def test_info_summary_from_file(tmp_path, capsys):
    path = tmp_path / "d.bin"
    path.write_bytes(bytes.fromhex(HEX))
    assert main(["info", str(path), "--summary"]) == 0
    assert capsys.readouterr().out.split() == ["ipi_pointer=1", "opaque=1"]


def test_dump_tree(capsys):
    assert main(["dump", "--hex", HEX]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("IPIDescriptorPointer [IPI_DESCR_POINTER 0x09]: 0 -> 4")
    assert lines[1].startswith("OpaqueDescriptor [ISO_RESERVED 0x20]: 4 -> 9")


def test_decode_error_exit_status(capsys):
    assert main(["info", "--hex", "0901"]) == 1
    assert "insufficient_bytes" in capsys.readouterr().err


def test_skip_errors_reports_issue(capsys):
    assert main(["dump", "--hex", "0901" + "ff" + HEX, "--skip-errors"]) == 0
    captured = capsys.readouterr()
    assert "IPIDescriptorPointer" in captured.out
    assert "insufficient_bytes" in captured.err


def test_tags_listing(capsys):
    assert main(["tags"]) == 0
    out = capsys.readouterr().out
    assert "0x43  LANGUAGE_DESCR" in out
    assert "0x15-0x3F  ISO_RESERVED" in out


@pytest.mark.parametrize("flag", ["--max-depth", "--offset"])
def test_negative_numbers_rejected_by_parser(flag, capsys):
    with pytest.raises(SystemExit) as info:
        main(["info", "--hex", HEX, flag, "-1"])
    assert info.value.code == 2
    assert "must be >= 0" in capsys.readouterr().err
