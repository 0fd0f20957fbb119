"""
Main NiceGUI application: upload point clouds, run PCA, inspect the charts.

Layout:
- Header with a settings toggle
- Upload card: drop zone / file picker, accepted file list, run button
- Results card: summary statistics, PCA scatter, variance charts
- Settings drawer: analysis API URL (right side, toggled from header)

Run with:
    python scripts/run_ui.py
"""

import json
import logging
from pathlib import Path
from typing import Optional

from nicegui import ui

from file_selection import XYZ_SUFFIX, SelectedFile
from pca_client import ApiConfig, PcaApiClient
from ui.state import AppState
from ui.components import build_error_panel, build_file_list, build_results
from ui.workers import run_analysis

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent.parent
SETTINGS_PATH = BASE_DIR / ".ui_settings.json"

RESULT_FILENAME = "pca_result.json"


# ═══════════════════════════════════════════════════════════════════════════
# Settings persistence
# ═══════════════════════════════════════════════════════════════════════════

def _load_settings(path: Optional[Path] = None) -> dict:
    path = path or SETTINGS_PATH
    defaults = {"api_url": ""}
    if path.is_file():
        try:
            with open(path) as f:
                saved = json.load(f)
            if isinstance(saved, dict):
                defaults.update(saved)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return defaults


def _save_settings(settings: dict, path: Optional[Path] = None) -> None:
    path = path or SETTINGS_PATH
    with open(path, "w") as f:
        json.dump(settings, f, indent=2)


def _resolve_api_config(api_url: Optional[str], settings: dict) -> ApiConfig:
    """CLI flag wins over saved settings, which win over the environment."""
    return ApiConfig.from_env(api_url or settings.get("api_url") or None)


# ═══════════════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════════════

def main(port: int = 8080, api_url: Optional[str] = None) -> None:
    @ui.page("/")
    def index():
        _build_page(api_url)

    ui.run(title="PCA Point-Cloud Viewer", port=port, reload=False)


# ═══════════════════════════════════════════════════════════════════════════
# Page builder
# ═══════════════════════════════════════════════════════════════════════════

def _build_page(api_url: Optional[str] = None) -> None:
    settings = _load_settings()
    state = AppState(api=_resolve_api_config(api_url, settings))
    client = PcaApiClient(state.api)

    # ── Thin header bar ─────────────────────────────────────────────────
    with ui.header().classes(
        "bg-blue-800 text-white items-center h-12 px-4"
    ).style("min-height:48px"):
        ui.label("PCA Point-Cloud Viewer").classes("text-lg font-bold")
        ui.space()
        ui.button(
            icon="settings", on_click=lambda: settings_drawer.toggle()
        ).props("flat round text-color=white size=sm")

    # ── Settings drawer ─────────────────────────────────────────────────
    with ui.right_drawer(value=False).classes(
        "bg-gray-50 p-4"
    ).style("z-index:200") as settings_drawer:
        ui.label("Settings").classes("text-xl font-bold mb-4")
        ui.separator()

        ui.input(
            label="Analysis API URL",
            value=state.api.api_url,
            on_change=lambda e: settings.update(api_url=(e.value or "").strip()),
        ).classes("w-full")
        ui.label(
            "Saved to .ui_settings.json (gitignored)."
        ).classes("text-xs text-gray-400 mt-1")

        ui.button(
            "Save Settings",
            on_click=lambda: _handle_save_settings(settings, state),
            icon="save",
        ).classes("w-full mt-4").props("color=primary")

    # ── Upload card ─────────────────────────────────────────────────────
    with ui.column().classes("w-full max-w-5xl mx-auto p-4 gap-4"):
        with ui.card().classes("w-full"):
            ui.label("1. Upload point clouds").classes("text-lg font-bold")
            upload = ui.upload(
                label=f"Drop {XYZ_SUFFIX} files here or click to browse",
                multiple=True,
                auto_upload=True,
                on_multi_upload=lambda e: _handle_files(e, state, upload, refresh),
            ).classes("w-full")

            file_list_container = ui.element("div").classes("w-full")

            with ui.row().classes("w-full items-center gap-2"):
                process_btn = ui.button(
                    "Run PCA Analysis",
                    on_click=lambda: run_analysis(state, client, refresh),
                    icon="play_arrow",
                ).props("color=primary")
                spinner = ui.spinner(size="md", color="primary")
                loading_label = ui.label("Analyzing…").classes("text-sm text-gray-500")

        # ── Results card ────────────────────────────────────────────────
        results_container = ui.element("div").classes("w-full")

    def refresh() -> None:
        try:
            file_list_container.clear()
            with file_list_container:
                build_file_list(state.selection)

            process_btn.set_enabled(state.can_submit)
            spinner.set_visibility(state.loading)
            loading_label.set_visibility(state.loading)

            results_container.clear()
            with results_container:
                _build_results_card(state)
        except RuntimeError:
            logger.debug("Client disconnected before refresh")

    refresh()


def _build_results_card(state: AppState) -> None:
    if state.error and not state.loading:
        with ui.card().classes("w-full"):
            build_error_panel(state.error)

    if state.result is None:
        return

    result = state.result
    with ui.card().classes("w-full"):
        with ui.row().classes("w-full items-center"):
            ui.label("2. Results").classes("text-lg font-bold")
            ui.space()
            ui.button(
                "Download JSON",
                on_click=lambda: ui.download(
                    json.dumps(result.to_payload(), indent=2).encode("utf-8"),
                    RESULT_FILENAME,
                ),
                icon="download",
            ).props("flat dense")
        build_results(result)


# ═══════════════════════════════════════════════════════════════════════════
# Event handlers
# ═══════════════════════════════════════════════════════════════════════════

def _handle_save_settings(settings: dict, state: AppState) -> None:
    _save_settings(settings)
    state.api.api_url = ApiConfig.from_env(settings.get("api_url") or None).api_url
    ui.notify("Settings saved.", type="positive")


def _handle_files(event, state: AppState, upload, refresh_fn) -> None:
    candidates = [
        SelectedFile(name=name, data=content.read())
        for name, content in zip(event.names, event.contents)
    ]
    selection = state.replace_selection(candidates)
    logger.info(
        "Selected %d file(s), ignored %d", len(selection), len(selection.rejected)
    )

    if selection.rejected:
        ui.notify(
            f"Ignored {len(selection.rejected)} file(s) without {XYZ_SUFFIX}: "
            + ", ".join(selection.rejected),
            type="warning",
        )

    upload.reset()
    refresh_fn()
