"""End-to-end persistence through FindingStore and JsonFindingRepo."""

import json
from pathlib import Path

from slither_sync.application import FindingStore
from slither_sync.domain.value_objects import SyncState
from slither_sync.infrastructure.persistence import JsonFindingRepo, StoragePaths


def _new_store() -> FindingStore:
    return FindingStore(JsonFindingRepo())


class TestFindingStorePersistence:
    async def test_reload_in_new_store_keeps_state(self, workspace: Path, make_finding) -> None:
        first = _new_store()
        await first.replace_all(
            workspace,
            [make_finding(check="a"), make_finding(check="b"), make_finding(check="a")],
        )
        await first.validate(workspace)

        second = _new_store()
        assert await second.load(workspace)

        reloaded = second.get(workspace)
        assert [f.check for f in reloaded] == ["a", "b"]
        assert all(f.in_sync == SyncState.IN_SYNC for f in reloaded)
        assert [f.to_dict() for f in reloaded] == [f.to_dict() for f in first.get(workspace)]

    async def test_drift_survives_reload(self, workspace: Path, make_finding) -> None:
        store = _new_store()
        await store.replace_all(workspace, [make_finding()])

        source = workspace / "contracts" / "Token.sol"
        source.write_text(source.read_text().replace("external", "public"))
        await store.validate(workspace, source)

        reloaded = _new_store()
        await reloaded.load(workspace)
        (finding,) = reloaded.get(workspace)
        assert finding.in_sync == SyncState.OUT_OF_SYNC
        assert reloaded.goto_finding(workspace, finding) is None

    async def test_legacy_file_is_backfilled_on_load(self, workspace: Path, make_finding) -> None:
        path = StoragePaths(workspace).results_path
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps([make_finding()]), encoding="utf-8")

        store = _new_store()
        await store.load(workspace)

        persisted = json.loads(path.read_text(encoding="utf-8"))
        assert "_ext_source_hash" in persisted[0]["elements"][0]["source_mapping"]
        report = await store.validate(workspace)
        assert report.in_sync == 1

    async def test_corrupt_file_loads_empty_and_is_kept(self, workspace: Path) -> None:
        path = StoragePaths(workspace).results_path
        path.parent.mkdir(parents=True)
        path.write_text("[{", encoding="utf-8")

        store = _new_store()

        assert await store.load(workspace) is True
        assert store.get(workspace) == ()
        assert path.read_text(encoding="utf-8") == "[{"

    async def test_clear_removes_file(self, workspace: Path, make_finding) -> None:
        store = _new_store()
        await store.replace_all(workspace, [make_finding()])

        await store.clear(workspace)

        assert not StoragePaths(workspace).results_path.exists()
        reloaded = _new_store()
        await reloaded.load(workspace)
        assert reloaded.get(workspace) == ()

    async def test_undecodable_file_loads_empty(self, workspace: Path) -> None:
        path = StoragePaths(workspace).results_path
        path.parent.mkdir(parents=True)
        path.write_bytes(b'[{"check": "x\xff\xfe"}]')

        store = _new_store()

        assert await store.load(workspace) is True
        assert store.get(workspace) == ()

    async def test_unreadable_file_loads_empty(self, workspace: Path) -> None:
        path = StoragePaths(workspace).results_path
        path.mkdir(parents=True)

        store = _new_store()

        assert await store.load(workspace) is True
        assert store.get(workspace) == ()
