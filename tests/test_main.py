import sys


def test_main_loads_map_argument_and_runs(monkeypatch, tmp_path):
    import gridcaster.__main__ as entry

    path = tmp_path / "room.json"
    path.write_text('{"map": [[1, 1], [1, 0]]}')
    ran = []

    class StubViewer:
        def __init__(self, grid):
            self.grid = grid

        def run(self):
            ran.append(self.grid.rows())

    monkeypatch.setattr(entry, "Viewer", StubViewer)
    monkeypatch.setattr(sys, "argv", ["gridcaster", str(path)])
    entry.main()
    assert ran == [[[1, 1], [1, 0]]]
