"""
Background task wrapper for the analysis upload.

Uses NiceGUI's run.io_bound so the page stays responsive while the request
is in flight.
"""

import logging
from typing import Callable

from nicegui import run, ui

from pca_client import AnalysisApiError, ApiConfigurationError, PcaApiClient
from ui.state import AppState

logger = logging.getLogger(__name__)

ERROR_PREFIX = "An error occurred: "


def _report_error(state: AppState, message: str) -> None:
    state.error = message
    # Stays open until dismissed.
    ui.notify(ERROR_PREFIX + message, type="negative", close_button=True, timeout=0)


async def run_analysis(
    state: AppState,
    client: PcaApiClient,
    notify: Callable,
) -> None:
    """Upload the current selection and store the result on *state*.

    *notify* re-renders the page; it runs once when loading starts and once
    when the call settles, whatever the outcome.
    """
    if not state.selection:
        return

    try:
        client.check_configured()
    except ApiConfigurationError as exc:
        logger.warning("Analysis not attempted: %s", exc)
        _report_error(state, str(exc))
        notify()
        return

    state.loading = True
    state.error = None
    state.result = None
    notify()

    try:
        state.result = await run.io_bound(
            client.analyze, list(state.selection.files)
        )
    except AnalysisApiError as exc:
        _report_error(state, str(exc))
    except Exception as exc:
        logger.exception("Analysis failed")
        _report_error(state, str(exc) or type(exc).__name__)
    finally:
        state.loading = False
        notify()
