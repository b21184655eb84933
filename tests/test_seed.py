import json

import pytest

from app.realtime.seed import load_seed_document, seed_realtime, select_seed_payload
from app.scripts import seed_realtime as seed_cli


def test_select_keeps_recognised_roots_only():
    doc = {"delivery_boys": {"p1": {}}, "users": {}, "orders": {"x": 1}, "meta": "v2"}
    assert set(select_seed_payload(doc)) == {"delivery_boys", "users"}


def test_select_without_recognised_roots_fails():
    with pytest.raises(ValueError):
        select_seed_payload({"orders": {}, "restaurants": {}})


@pytest.mark.anyio
async def test_seed_patches_roots_in_place(store):
    await store.update("delivery_boys/existing", {"status": "online"})
    await store.update("route_cache/k1", {"polyline": "keep"})

    updated = await seed_realtime(
        store,
        {
            "delivery_boys": {"p1": {"status": "offline", "last_updated": 1}},
            "route_cache": {"k2": {"polyline": "new"}},
            "drivers": {},
            "ignored": {"a": 1},
        },
    )

    assert updated == ["delivery_boys", "route_cache"]
    snapshot = store.snapshot()
    assert set(snapshot["delivery_boys"]) == {"existing", "p1"}
    assert set(snapshot["route_cache"]) == {"k1", "k2"}
    assert "ignored" not in snapshot


def test_load_seed_document(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"users": {"u1": {"city": "Indore"}}}), encoding="utf-8")
    assert load_seed_document(path)["users"]["u1"]["city"] == "Indore"

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed_document(path)

    with pytest.raises(FileNotFoundError):
        load_seed_document(tmp_path / "missing.json")


def test_cli_exit_codes(tmp_path):
    good = tmp_path / "export.json"
    good.write_text(json.dumps({"active_orders": {"o1": {"status": "assigned"}}}), encoding="utf-8")
    unsupported = tmp_path / "other.json"
    unsupported.write_text(json.dumps({"orders": {}}), encoding="utf-8")

    assert seed_cli.main([str(good)]) == 0
    assert seed_cli.main([str(unsupported)]) == 1
    assert seed_cli.main([str(tmp_path / "missing.json")]) == 1


def test_cli_fails_when_nothing_was_written(tmp_path):
    empty_roots = tmp_path / "empty.json"
    empty_roots.write_text(json.dumps({"users": {}, "drivers": []}), encoding="utf-8")

    assert seed_cli.main([str(empty_roots)]) == 1
