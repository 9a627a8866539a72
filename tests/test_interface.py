# tests/test_interface.py
"""
Headless runs of the step-through viewer: every phase of the bundled example,
and a failing source sent back to the editor.
"""

import asyncio

import pytest

pytest.importorskip("textual")

from SJavaVerifier import SJavaVerifierApp
from InterfaceComponents.VerifierPhase import (
    FIRST_PASS,
    LINE_CLASSIFICATION,
    SECOND_PASS,
    SOURCE_INPUT,
)


ILLEGAL = "int g;\nvoid m() {\n    int copy = g;\n    return;\n}\n"


def _run(scenario):
    async def _main():
        app = SJavaVerifierApp()
        async with app.run_test() as pilot:
            await scenario(app, pilot)
    asyncio.run(_main())


async def _finish_phase(app, pilot):
    app.action_complete_step()
    await pilot.pause()


def test_example_walks_through_every_phase():
    async def scenario(app, pilot):
        assert app.current_phase == SOURCE_INPUT
        app.action_load_example()
        await pilot.pause()
        assert app.file_name == "example.sjava"

        app.action_start_verification()
        await _finish_phase(app, pilot)
        assert app.current_phase == LINE_CLASSIFICATION and app.phase_completed
        line_count = len(app.left_panel.source_editor.text.splitlines())
        assert app.right_panel.line_table.row_count == line_count

        await _finish_phase(app, pilot)
        assert app.current_phase == FIRST_PASS
        await _finish_phase(app, pilot)
        assert app.phase_completed and not app.phase_failed
        assert app.left_panel.line_table.row_count == line_count

        await _finish_phase(app, pilot)
        assert app.current_phase == SECOND_PASS
        await _finish_phase(app, pilot)
        assert app.phase_completed and not app.phase_failed
        assert app.right_panel.symbol_table.row_count > 0

        await _finish_phase(app, pilot)
        assert app.current_phase == SOURCE_INPUT

    _run(scenario)


def test_failure_returns_to_source_input():
    async def scenario(app, pilot):
        app.left_panel.source_editor.text = ILLEGAL
        await pilot.pause()

        app.action_start_verification()
        await _finish_phase(app, pilot)
        await _finish_phase(app, pilot)
        await _finish_phase(app, pilot)
        assert app.current_phase == FIRST_PASS and not app.phase_failed
        await _finish_phase(app, pilot)
        await _finish_phase(app, pilot)
        assert app.current_phase == SECOND_PASS
        assert app.phase_failed
        assert app.error_message == "Line 3: reference to uninitialized variable: g."

        await _finish_phase(app, pilot)
        assert app.current_phase == SOURCE_INPUT
        assert app.left_panel.source_editor.text == ILLEGAL

    _run(scenario)


def test_manual_ticks_and_speed():
    async def scenario(app, pilot):
        app.left_panel.source_editor.text = ILLEGAL
        app.action_start_verification()
        app.action_manual_tick()
        app.action_manual_tick()
        await pilot.pause()
        assert app.right_panel.line_table.row_count == 2
        assert not app.phase_completed

        interval = app.ticker.interval
        assert app.ticker.increase_speed() < interval
        assert app.ticker.decrease_speed() == interval

    _run(scenario)
