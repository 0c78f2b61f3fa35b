"""Tests for input parsing, the trace table and the command line."""

import io

import pytest

import simulator
from simulator import (
    SimulationInput,
    TraceWriter,
    format_footer,
    format_header,
    format_row,
    generate_reference_string,
    parse_input,
    parse_pages,
    simulate,
)

FIFO_INPUT = "3\nFIFO\n1 2 3 4 1 2 5 1 2 3 4 5 -1\n"

FIFO_ROWS = [
    "01     01",
    "02     01 02",
    "03     01 02 03",
    "04 F   04 02 03",
    "01 F   04 01 03",
    "02 F   04 01 02",
    "05 F   05 01 02",
    "01     05 01 02",
    "02     05 01 02",
    "03 F   05 03 02",
    "04 F   05 03 04",
    "05     05 03 04",
]

# Every row ends with a space after the last frame
FIFO_OUTPUT = "\n".join(
    ["Replacement Policy = FIFO", "-" * 37, "Page   Content of Frames", "----   -----------------"]
    + [row + " " for row in FIFO_ROWS]
    + ["-" * 37, "Number of page faults = 6"]
) + "\n"


class TestParseInput:

    def test_reads_frames_policy_and_pages(self) -> None:
        config = parse_input(FIFO_INPUT)
        assert config.capacity == 3
        assert config.policy_name == "FIFO"
        assert config.pages == [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]

    def test_pages_may_span_lines(self) -> None:
        config = parse_input("2\nclock\n1\n2\n3 -1")
        assert config.pages == [1, 2, 3]

    def test_stops_at_sentinel(self) -> None:
        config = parse_input("2\nLRU\n1 2 -1 3 4\n")
        assert config.pages == [1, 2]

    def test_missing_sentinel_ends_at_eof(self) -> None:
        config = parse_input("2\nLRU\n5 6")
        assert config.pages == [5, 6]

    def test_empty_trace(self) -> None:
        config = parse_input("4\nOPTIMAL\n-1\n")
        assert config.pages == []

    def test_policy_on_same_line_as_frames(self) -> None:
        config = parse_input("3 FIFO\n1 -1")
        assert config.policy_name == "FIFO"
        assert config.pages == [1]

    def test_blank_lines_before_policy(self) -> None:
        config = parse_input("3\n\n  lru  \n7 -1")
        assert config.policy_name == "lru"

    @pytest.mark.parametrize("text", [
        "",
        "three\nFIFO\n1 -1",
        "0\nFIFO\n1 -1",
        "3\n",
        "3\nFIFO\n1 x -1",
        "3\nFIFO\n1 -5 -1",
    ])
    def test_malformed_input_raises(self, text) -> None:
        with pytest.raises(ValueError):
            parse_input(text)

    def test_parse_pages(self) -> None:
        assert parse_pages("4 5\t6\n-1 7") == [4, 5, 6]


class TestTraceTable:

    def test_header(self) -> None:
        assert format_header("lru").splitlines() == [
            "Replacement Policy = lru",
            "-" * 37,
            "Page   Content of Frames",
            "----   -----------------",
        ]

    def test_fault_row(self) -> None:
        assert format_row(4, True, [4, 2, 3]) == "04 F   04 02 03 "

    def test_hit_row(self) -> None:
        assert format_row(1, False, [1]) == "01     01 "

    def test_wide_page_numbers(self) -> None:
        assert format_row(123, False, [123, 7]) == "123     123 07 "

    def test_footer(self) -> None:
        assert format_footer(9).splitlines() == ["-" * 37, "Number of page faults = 9"]

    def test_writer_prints_to_stream(self) -> None:
        out = io.StringIO()
        writer = TraceWriter(out)
        writer.write_row(2, False, [1, 2])
        assert out.getvalue() == "02     01 02 \n"


class TestSimulate:

    def test_fifo_trace_table(self) -> None:
        out = io.StringIO()
        faults = simulate(parse_input(FIFO_INPUT), out)
        assert faults == 6
        assert out.getvalue() == FIFO_OUTPUT

    def test_header_keeps_policy_name_as_given(self) -> None:
        out = io.StringIO()
        simulate(SimulationInput(2, "Clock", [1]), out)
        assert out.getvalue().startswith("Replacement Policy = Clock\n")

    def test_empty_trace_prints_no_rows(self) -> None:
        out = io.StringIO()
        assert simulate(SimulationInput(3, "LRU", []), out) == 0
        lines = out.getvalue().splitlines()
        assert len(lines) == 6
        assert lines[-1] == "Number of page faults = 0"

    def test_unknown_policy_prints_nothing(self) -> None:
        out = io.StringIO()
        with pytest.raises(ValueError):
            simulate(SimulationInput(3, "LFU", [1, 2]), out)
        assert out.getvalue() == ""


class TestGenerateReferenceString:

    def test_length_and_range(self) -> None:
        pages = generate_reference_string(100, 5, seed=1)
        assert len(pages) == 100
        assert all(0 <= page < 5 for page in pages)

    def test_seed_is_reproducible(self) -> None:
        assert (generate_reference_string(30, 8, seed=3)
                == generate_reference_string(30, 8, seed=3))

    def test_zero_length(self) -> None:
        assert generate_reference_string(0, 8, seed=0) == []


class TestMain:

    def test_reads_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(FIFO_INPUT))
        assert simulator.main([]) == 0
        assert capsys.readouterr().out == FIFO_OUTPUT

    def test_reads_input_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "input.txt"
        path.write_text(FIFO_INPUT)
        assert simulator.main(["--input", str(path)]) == 0
        assert capsys.readouterr().out == FIFO_OUTPUT

    def test_options_override_input(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(FIFO_INPUT))
        assert simulator.main(["--policy", "optimal"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Replacement Policy = optimal\n")
        assert out.rstrip().endswith("Number of page faults = 4")

    def test_options_only(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        argv = ["-f", "1", "-p", "clock", "--pages", "1 1 2 -1"]
        assert simulator.main(argv) == 0
        assert capsys.readouterr().out.rstrip().endswith("Number of page faults = 1")

    def test_unknown_policy_fails(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("3\nRANDOM\n1 2 3 -1\n"))
        assert simulator.main([]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Replacement policy 'RANDOM' not found" in captured.err

    def test_malformed_input_fails(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("3\nFIFO\n1 two -1\n"))
        assert simulator.main([]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_input_file_fails(self, tmp_path, capsys) -> None:
        assert simulator.main(["--input", str(tmp_path / "missing.txt")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_frames_option_fails(self, capsys) -> None:
        argv = ["-f", "0", "-p", "fifo", "--pages", "1 2"]
        assert simulator.main(argv) == 1
        assert "Error:" in capsys.readouterr().err

    def test_random_trace(self, capsys) -> None:
        argv = ["-f", "3", "-p", "lru", "--random", "25", "--seed", "4"]
        assert simulator.main(argv) == 0
        lines = capsys.readouterr().out.splitlines()
        # Header, 25 rows, footer
        assert len(lines) == 4 + 25 + 2

    def test_compare(self, capsys) -> None:
        argv = ["--compare", "-f", "3", "--pages", "1 2 3 4 1 2 5 1 2 3 4 5"]
        assert simulator.main(argv) == 0
        out = capsys.readouterr().out
        assert "Algorithm Comparison Summary" in out
        for name in ("FIFO", "LRU", "OPTIMAL", "CLOCK"):
            assert name in out

    def test_compare_rejects_unknown_policy(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("3\nBOGUS\n1 2 3 4 -1\n"))
        assert simulator.main(["--compare"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Replacement policy 'BOGUS' not found" in captured.err

    def test_compare_with_named_policy(self, capsys) -> None:
        argv = ["--compare", "-f", "2", "-p", "lru", "--pages", "1 2 3"]
        assert simulator.main(argv) == 0
        assert "Algorithm Comparison Summary" in capsys.readouterr().out

    def test_plain_run_does_not_load_report(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(FIFO_INPUT))
        assert simulator.main([]) == 0
        assert not hasattr(simulator, "report")

    def test_plot(self, tmp_path, capsys) -> None:
        path = tmp_path / "faults.png"
        argv = ["-f", "3", "-p", "fifo", "--pages", "1 2 3 4 1 2 5 1 2 3 4 5",
                "--plot", str(path), "--max-frames", "5"]
        assert simulator.main(argv) == 0
        assert path.exists()
        assert path.stat().st_size > 0
