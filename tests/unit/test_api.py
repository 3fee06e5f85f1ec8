"""Tests for the composable API functions in tracespec.api."""

import json

import pytest

from tracespec.analyzer import TraceLimitExceeded
from tracespec.analyzer_types import AnalysisStats, AnalyzerConfig
from tracespec.api import analyze, analyze_file, analyze_with_stats, dump_trace
from tracespec.trace_types import TraceSpecification, VariableKind

SAMPLE_SOURCE = """\
#include <bits/stdc++.h>

using namespace std;

    int m, n;
    short path[200][200];

    int longestIncreasingPath(vector<vector<int>>& matrix) {
        m = matrix.size();
        n = matrix[0].size();

        memset(path, 0, sizeof(path));

        int max_path = 1;
        for(int i = 0; i < m; i++)
            for(int j = 0; j < n; j++)
                max_path = max(max_path, dfs(i, j, matrix));

        return max_path;
    }

    int dfs(int i, int j, vector<vector<int>>& mat) {
        if(path[i][j] >   0) return path[i][j];
        if(path[i][j] == -1) return 0;
        int max_next = 0;
        path[i][j] = -1;
        if(i > 0   && mat[i][j] < mat[i-1][j]) max_next = max(max_next, dfs(i-1, j, mat));
        if(j > 0   && mat[i][j] < mat[i][j-1]) max_next = max(max_next, dfs(i, j-1, mat));
        if(i < m-1 && mat[i][j] < mat[i+1][j]) max_next = max(max_next, dfs(i+1, j, mat));
        if(j < n-1 && mat[i][j] < mat[i][j+1]) max_next = max(max_next, dfs(i, j+1, mat));
        return path[i][j] = 1 + max_next;
    }

int main(){
    vector<vector<int>> matrix = {{3,4,5}, {0,1,0}, {0,0,0}};
    int ans = longestIncreasingPath(matrix);

    cout << ans;

    return 0;
}
"""


class TestAnalyze:
    def test_returns_trace_specification(self):
        assert isinstance(analyze("int x = 1;"), TraceSpecification)

    def test_empty_source(self):
        assert analyze("").is_empty()

    def test_sample_program_recursion(self):
        spec = analyze(SAMPLE_SOURCE)
        assert [f.function for f in spec.call_stack] == ["dfs"] * 4
        assert [f.line for f in spec.call_stack] == [27, 28, 29, 30]

    def test_sample_program_declarations(self):
        spec = analyze(SAMPLE_SOURCE)
        by_name = {v.name: v for v in spec.variables}
        assert by_name["max_path"].value == 1
        assert by_name["matrix"].kind == VariableKind.ARRAY
        assert by_name["ans"].kind == VariableKind.ARRAY
        assert by_name["i"].line == 15

    def test_sample_program_returns(self):
        spec = analyze(SAMPLE_SOURCE)
        values = [r.value for r in spec.returns]
        assert values[0] == "max_path"
        assert "path[i][j] = 1 + max_next" in values
        assert values[-1] == "0"


class TestAnalyzeWithStats:
    def test_stats_reflect_trace(self):
        spec, stats = analyze_with_stats("int x = 1;\nint y = 2;\n")
        assert isinstance(stats, AnalysisStats)
        assert stats.steps == len(spec.steps) == 2
        assert stats.variables == 2
        assert stats.source_lines == 2
        assert stats.nodes_visited > 0

    def test_report_is_text(self):
        _spec, stats = analyze_with_stats("int x = 1;")
        assert "Analysis Statistics" in stats.report()


class TestNodeLimit:
    def test_limit_exceeded_raises(self):
        with pytest.raises(TraceLimitExceeded):
            analyze("int x = 5;", AnalyzerConfig(max_nodes=2))

    def test_generous_limit_is_transparent(self):
        spec = analyze("int x = 5;", AnalyzerConfig(max_nodes=1000))
        assert spec.variables[0].value == 5


class TestAnalyzeFile:
    def test_reads_file(self, tmp_path):
        source_file = tmp_path / "prog.cpp"
        source_file.write_text("int x = 3;\n", encoding="utf-8")
        spec = analyze_file(source_file)
        assert spec.variables[0].value == 3

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            analyze_file(tmp_path / "missing.cpp")


class TestDumpTrace:
    def test_returns_json(self):
        record = json.loads(dump_trace("int x = 1;"))
        assert record["steps"][0]["action"] == "declare"

    def test_compact_output(self):
        assert "\n" not in dump_trace("int x = 1;", indent=None)
