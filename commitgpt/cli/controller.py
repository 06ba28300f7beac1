import logging
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable, Optional, Sequence

import click
from rich.console import Console

from commitgpt.config import SETTINGS_REMEDIATION
from commitgpt.core.client import ClientConfig, CompletionClient
from commitgpt.core.prompt import build_prompt
from commitgpt.errors import CommitGptError, EmptyDiffError, SettingsError
from commitgpt.logger import commitgpt_logger
from commitgpt.schemas import CompletionRequest, CompletionResponse, Overrides
from commitgpt.settings import FileSettings, load_file_settings, resolve, settings_path

from .selection import PickFn, SelectionController, SelectionState, questionary_pick
from .service import GitService

FETCH_MESSAGE = "🤖 Fetching responses from ChatGPT."

StatusFn = Callable[[str], AbstractContextManager]


def rich_status(message: str) -> AbstractContextManager:
    """Spinner on stderr that animates until the ``with`` block exits."""

    return Console(stderr=True).status(message, spinner="dots")


class CommitGptController:
    """Main controller orchestrating the generate-pick-commit pipeline."""

    def __init__(
        self,
        git_service: GitService,
        overrides: Optional[Overrides] = None,
        paths: Sequence[str] = (),
        reason: str = "",
        logger: Optional[logging.Logger] = None,
        settings_loader: Callable[[], FileSettings] = load_file_settings,
        settings_location: Callable[[], Path] = settings_path,
        client_factory: Callable[[ClientConfig], CompletionClient] = CompletionClient,
        pick: PickFn = questionary_pick,
        status: StatusFn = rich_status,
        echo: Callable[..., None] = click.echo,
        echo_err: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._logger = logger or commitgpt_logger(__name__)
        self._settings_loader = settings_loader
        self._settings_location = settings_location
        self._client_factory = client_factory
        self._pick = pick
        self._status = status
        self._echo = echo
        self._echo_err = echo_err or (lambda message: self._echo(message, err=True))
        self.git_service = git_service
        self.overrides = overrides or Overrides()
        self.paths = tuple(paths)
        self.reason = reason

    # --- Public API ---
    def run(self) -> int:
        self._logger.debug("Starting commitgpt controller run")

        try:
            state = self._run_pipeline()
        except SettingsError as exc:
            self._logger.error("Settings could not be loaded: %s", exc)
            self._echo_err(
                SETTINGS_REMEDIATION.format(path=self._settings_location(), details=exc)
            )
            return 1
        except CommitGptError as exc:
            self._logger.error("%s: %s", type(exc).__name__, exc)
            self._echo_err(f"❌ {exc}")
            return 1
        except Exception as exc:
            self._logger.exception("Unexpected failure")
            self._echo_err(f"An error occurred: {exc}")
            return 1

        if state is SelectionState.CANCELLED:
            self._echo("No commit created.")
        else:
            self._echo("✅ Commit created successfully.")
        return 0

    # --- Private helpers ---
    def _run_pipeline(self) -> SelectionState:
        file_settings = self._settings_loader()
        settings = resolve(self.overrides, file_settings)
        self._logger.debug("Resolved %r", settings)

        diff = self.git_service.extract_diff(self.paths, settings.ignore_space)
        if not diff.strip():
            raise EmptyDiffError()

        messages = build_prompt(self.reason, diff, settings.context_prefix)
        request = CompletionRequest.from_settings(settings, messages)

        client = self._client_factory(
            ClientConfig(
                api_key=settings.api_key,
                base_url=file_settings.base_url,
                timeout=file_settings.timeout,
            )
        )
        candidates = self._fetch(client, request)

        selection = SelectionController(
            candidates,
            commit=self.git_service.commit,
            pick=self._pick,
            echo_err=self._echo_err,
        )
        return selection.run()

    def _fetch(self, client: CompletionClient, request: CompletionRequest) -> CompletionResponse:
        with self._status(FETCH_MESSAGE):
            return client.complete(request)
