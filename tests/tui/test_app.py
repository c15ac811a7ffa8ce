"""Drive the real app headlessly: keys, canvas messages and saving."""

import asyncio

from textual import events

from memoria.store.drafts import list_drafts
from memoria.tui.app import MemoriaApp
from memoria.tui.widgets import SelectionCanvas


def test_keyboard_flow(work_dir):
    async def run():
        app = MemoriaApp(text="The cat sat", title="Cats", work_dir=work_dir)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.state.view == "select"
            assert app.state.title == "Cats"

            # nothing selected yet: "n" stays put
            await pilot.press("n")
            await pilot.pause()
            assert app.state.view == "select"

            await pilot.press("a")
            await pilot.pause()
            assert app.state.selected_count == 3

            await pilot.press("ctrl+z")
            await pilot.pause()
            assert app.state.selected_count == 0

            await pilot.press("a", "n")
            await pilot.pause()
            assert app.state.view == "memorize"
            assert app.state.memorization.hidden == {0, 1, 2}

            await pilot.press("r")
            await pilot.pause()
            assert app.state.memorization.hidden == set()

            await pilot.press("escape")
            await pilot.pause()
            assert app.state.view == "select"
            assert app.state.selected_count == 3

    asyncio.run(run())


def test_canvas_messages_select_words(work_dir):
    async def run():
        app = MemoriaApp(text="The cat sat", work_dir=work_dir)
        async with app.run_test() as pilot:
            await pilot.pause()

            app.post_message(SelectionCanvas.PointerDown(1))
            app.post_message(SelectionCanvas.PointerUp())
            await pilot.pause()
            assert app.state.editor.selected_indices() == [1]

            app.post_message(SelectionCanvas.PointerDown(0))
            app.post_message(SelectionCanvas.PointerEnter(2))
            app.post_message(SelectionCanvas.PointerUp())
            await pilot.pause()
            assert app.state.editor.selected_indices() == [0, 1, 2]

    asyncio.run(run())


def test_focus_loss_abandons_drag(work_dir):
    async def run():
        app = MemoriaApp(text="The cat sat", work_dir=work_dir)
        async with app.run_test() as pilot:
            await pilot.pause()

            app.post_message(SelectionCanvas.PointerDown(0))
            app.post_message(SelectionCanvas.PointerEnter(2))
            await pilot.pause()
            assert app.state.editor.dragging

            app.post_message(events.AppBlur())
            await pilot.pause()
            assert not app.state.editor.dragging

            # the pointer-up arriving late commits nothing
            app.post_message(SelectionCanvas.PointerUp())
            await pilot.pause()
            assert app.state.editor.selected_indices() == []
            assert not app.state.can_undo

    asyncio.run(run())


def test_save_draft(work_dir):
    async def run():
        app = MemoriaApp(text="The cat sat", title="Cats", work_dir=work_dir)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a")
            await pilot.press("ctrl+s")
            await pilot.pause()
            await pilot.press("enter")
            await pilot.pause()

            assert app.state.draft_id is not None

    asyncio.run(run())

    (draft,) = list_drafts(work_dir / ".memoria")
    assert draft.title == "Cats"
    assert draft.selected_indices == [0, 1, 2]
