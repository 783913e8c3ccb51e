"""エディタコントローラのテスト"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from gxt_editor.core.constants import ActionKind, BusyState, Messages, Severity
from gxt_editor.core.editor_controller import EditorController
from gxt_editor.core.errors import GxtServiceError
from gxt_editor.core.memory_service import InMemoryGxtService
from gxt_editor.models.entry import GxtEntry


async def _load(controller, path="/data/american.gxt"):
    assert await controller.request_load_path(path)


def _make_dirty(controller):
    entry_id = controller.add_entry()
    controller.edit_key(entry_id, "NEW")
    return entry_id


# ---- 破棄を伴う操作 ----


@pytest.mark.asyncio
async def test_load_from_path(controller):
    await _load(controller)

    store = controller.store
    assert store.path == "/data/american.gxt"
    assert [e.key for e in store.entries] == ["INTRO", "CASH", "BYE"]
    assert store.entries[0].value == "Welcome to\nLiberty City"
    assert not store.dirty
    controller._notify.assert_called_with(Messages.LOADED_FROM_ASSOCIATION, Severity.SUCCESS)


@pytest.mark.asyncio
async def test_open_via_picker(controller):
    controller._pick_open_path.return_value = "/data/american.gxt"

    assert await controller.request_open()

    assert controller.store.path == "/data/american.gxt"
    controller._notify.assert_called_with(Messages.LOADED, Severity.SUCCESS)


@pytest.mark.asyncio
async def test_open_cancelled_is_silent(controller):
    await _load(controller)
    controller._notify.reset_mock()

    assert await controller.request_open()

    controller._pick_open_path.assert_called_once()
    controller._notify.assert_not_called()
    assert controller.store.path == "/data/american.gxt"


@pytest.mark.asyncio
async def test_new_document(controller):
    await _load(controller)

    assert await controller.request_new()

    assert controller.store.path is None
    assert controller.store.entries == ()
    assert not controller.store.dirty
    controller._notify.assert_called_with(Messages.NEW_DOCUMENT, Severity.INFO)


@pytest.mark.asyncio
async def test_dirty_document_defers_guarded_action(controller):
    await _load(controller)
    _make_dirty(controller)

    assert not await controller.request_new()

    assert controller.awaiting_confirmation
    assert controller.pending_action.kind == ActionKind.NEW
    assert controller.store.entry_count == 4


@pytest.mark.asyncio
async def test_cancel_leaves_document_unchanged(controller):
    await _load(controller)
    _make_dirty(controller)
    before = controller.store.entries

    await controller.request_load_path("/data/broken.gxt")
    controller.cancel_pending()

    assert not controller.awaiting_confirmation
    assert controller.store.entries == before
    assert controller.store.path == "/data/american.gxt"
    assert controller.store.dirty


@pytest.mark.asyncio
async def test_confirm_executes_deferred_action(controller):
    await _load(controller)
    _make_dirty(controller)

    await controller.request_load_path("/data/broken.gxt")
    assert await controller.confirm_pending()

    assert controller.store.path == "/data/broken.gxt"
    assert not controller.store.dirty
    assert not controller.awaiting_confirmation


@pytest.mark.asyncio
async def test_load_failure_keeps_document(controller):
    await _load(controller)
    controller._notify.reset_mock()

    assert await controller.request_load_path("/data/missing.gxt")

    assert controller.store.path == "/data/american.gxt"
    message, severity = controller._notify.call_args.args
    assert severity == Severity.ERROR
    assert "missing.gxt" in message
    assert controller.busy is None


@pytest.mark.asyncio
async def test_busy_state_during_load(controller):
    await _load(controller)
    assert controller._on_busy_changed.call_args_list == [
        call(BusyState.LOADING),
        call(None),
    ]


@pytest.mark.asyncio
async def test_start_loads_startup_path_once(controller):
    assert await controller.start("/data/american.gxt")
    assert controller.store.path == "/data/american.gxt"

    assert not await controller.start("/data/broken.gxt")
    assert controller.store.path == "/data/american.gxt"


@pytest.mark.asyncio
async def test_start_uses_service_startup_path(controller, monkeypatch):
    monkeypatch.setattr(
        controller.service, "startup_path", MagicMock(return_value="/data/american.gxt")
    )
    assert await controller.start()
    assert controller.store.path == "/data/american.gxt"


@pytest.mark.asyncio
async def test_start_without_path(controller, monkeypatch):
    monkeypatch.setattr(controller.service, "startup_path", MagicMock(return_value=None))
    assert not await controller.start()
    assert controller.store.path is None


@pytest.mark.asyncio
async def test_recent_files_are_recorded(controller, isolated_config):
    await _load(controller)
    assert isolated_config.get_recent_files() == ["/data/american.gxt"]


# ---- 保存 ----


@pytest.mark.asyncio
async def test_save_existing_path(controller, memory_service):
    await _load(controller)
    entry_id = controller.store.entries[1].id
    controller.edit_value(entry_id, "$200")

    assert await controller.save()

    assert not controller.store.dirty
    assert memory_service.get("/data/american.gxt")[1] == GxtEntry(key="CASH", value="$200")
    controller._pick_save_path.assert_not_called()
    controller._notify.assert_called_with(Messages.SAVED, Severity.SUCCESS)


@pytest.mark.asyncio
async def test_save_refused_with_validation_error(controller, memory_service):
    """検証エラーがある場合はサービスを呼ばずに拒否する"""
    memory_service.save = AsyncMock(wraps=memory_service.save)
    await controller.request_load_path("/data/broken.gxt")

    assert not await controller.save()
    assert not await controller.save_as()

    memory_service.save.assert_not_awaited()
    controller._pick_save_path.assert_not_called()
    controller._notify.assert_called_with(Messages.FIX_VALIDATION_FIRST, Severity.ERROR)


@pytest.mark.asyncio
async def test_duplicate_keys_refuse_save(controller, memory_service):
    memory_service.save = AsyncMock(wraps=memory_service.save)
    first = controller.add_entry()
    second = controller.add_entry()
    controller.edit_key(first, "A")
    controller.edit_value(first, "x")
    controller.edit_key(second, "A")
    controller.edit_value(second, "y")
    controller._pick_save_path.return_value = "/data/new.gxt"

    assert not await controller.save()
    memory_service.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_save_without_path_requests_save_as(controller, memory_service):
    entry_id = controller.add_entry()
    controller.edit_key(entry_id, "HELLO")
    controller._pick_save_path.return_value = "/data/new.gxt"

    assert await controller.save()

    controller._pick_save_path.assert_called_once_with(None)
    assert controller.store.path == "/data/new.gxt"
    assert memory_service.get("/data/new.gxt") == [GxtEntry(key="HELLO", value="")]
    controller._notify.assert_called_with(Messages.SAVED_AS, Severity.SUCCESS)


@pytest.mark.asyncio
async def test_save_as_cancelled_is_silent(controller, memory_service):
    memory_service.save = AsyncMock(wraps=memory_service.save)
    await _load(controller)
    _make_dirty(controller)
    controller._notify.reset_mock()

    assert not await controller.save_as()

    controller._pick_save_path.assert_called_once_with("/data/american.gxt")
    memory_service.save.assert_not_awaited()
    controller._notify.assert_not_called()
    assert controller.store.dirty


@pytest.mark.asyncio
async def test_save_as_overrides_existing_path(controller, memory_service):
    await _load(controller)
    controller._pick_save_path.return_value = "/data/copy.gxt"

    assert await controller.save_as()

    assert controller.store.path == "/data/copy.gxt"
    assert [e.key for e in memory_service.get("/data/copy.gxt")] == ["INTRO", "CASH", "BYE"]


@pytest.mark.asyncio
async def test_save_failure_keeps_edits(controller, memory_service):
    await _load(controller)
    entry_id = _make_dirty(controller)
    memory_service.save = AsyncMock(side_effect=GxtServiceError("Write file failed"))

    assert not await controller.save()

    assert controller.store.dirty
    assert controller.store.get_entry(entry_id).key == "NEW"
    controller._notify.assert_called_with("Write file failed", Severity.ERROR)
    assert controller.busy is None


@pytest.mark.asyncio
async def test_busy_refuses_guarded_actions_and_saves(isolated_config):
    """ロード中は破棄を伴う操作と保存を拒否する"""
    release = asyncio.Event()
    service = InMemoryGxtService({"/data/slow.gxt": [GxtEntry(key="A", value="")]})
    original_load = service.load

    async def slow_load(path):
        await release.wait()
        return await original_load(path)

    service.load = slow_load
    controller = EditorController(
        service,
        pick_open_path=MagicMock(return_value=None),
        pick_save_path=MagicMock(return_value="/data/other.gxt"),
        notify=MagicMock(),
    )

    task = asyncio.create_task(controller.request_load_path("/data/slow.gxt"))
    await asyncio.sleep(0)
    assert controller.busy == BusyState.LOADING

    assert not await controller.request_new()
    assert not await controller.save()
    assert not await controller.save_as()
    controller._pick_save_path.assert_not_called()

    release.set()
    assert await task
    assert controller.busy is None
    assert controller.store.path == "/data/slow.gxt"


# ---- 編集 ----


def test_edit_key_normalizes(controller):
    entry_id = controller.add_entry()

    assert controller.edit_key(entry_id, "héllo!!123456") == "hllo!!12"
    assert controller.store.get_entry(entry_id).key == "hllo!!12"


def test_sort_and_remove(controller):
    ids = [controller.add_entry() for _ in range(3)]
    for entry_id, key in zip(ids, ["C", "A", "B"]):
        controller.edit_key(entry_id, key)

    controller.sort_entries()
    assert [e.key for e in controller.store.entries] == ["A", "B", "C"]

    assert controller.remove_entry(ids[1])
    assert [e.key for e in controller.store.entries] == ["B", "C"]


def test_status(controller):
    assert controller.status.text == "No file · 0 entries"
    controller.add_entry()
    status = controller.status
    assert status.text == "No file · 1 entry · Unsaved"
    assert status.invalid_count == 1
    assert not controller.can_save


@pytest.mark.asyncio
async def test_edit_during_save_stays_dirty(isolated_config):
    """保存の完了を待つ間に編集した内容は未保存のまま残る"""
    release = asyncio.Event()
    service = InMemoryGxtService({"/a.gxt": [GxtEntry(key="A", value="1")]})
    original_save = service.save

    async def blocking_save(document):
        await release.wait()
        return await original_save(document)

    service.save = blocking_save
    controller = EditorController(
        service,
        pick_open_path=MagicMock(return_value=None),
        pick_save_path=MagicMock(return_value=None),
        notify=MagicMock(),
    )
    await controller.request_load_path("/a.gxt")
    entry_id = controller.store.entries[0].id
    controller.edit_value(entry_id, "2")

    task = asyncio.create_task(controller.save())
    await asyncio.sleep(0)
    assert controller.busy == BusyState.SAVING
    controller.edit_value(entry_id, "3")
    release.set()

    assert await task
    assert service.get("/a.gxt")[0].value == "2"
    assert controller.store.get_entry(entry_id).value == "3"
    assert controller.store.dirty
    # 未保存の変更があるので、破棄を伴う操作は確認待ちになる
    assert not await controller.request_new()
    assert controller.awaiting_confirmation


@pytest.mark.asyncio
async def test_open_recent_is_guarded(controller):
    await _load(controller)
    _make_dirty(controller)

    assert not await controller.request_open_recent("/data/broken.gxt")
    assert controller.pending_action.kind == ActionKind.OPEN_RECENT

    assert await controller.confirm_pending()
    assert controller.store.path == "/data/broken.gxt"
    controller._notify.assert_called_with(Messages.LOADED, Severity.SUCCESS)
