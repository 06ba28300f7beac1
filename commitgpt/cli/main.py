import sys
from typing import Optional

import click
from dotenv import load_dotenv

from commitgpt.config import MAX_MAX_TOKENS, MAX_SUGGESTIONS, MIN_MAX_TOKENS, MIN_SUGGESTIONS, VERSION
from commitgpt.logger import set_commitgpt_log_level
from commitgpt.schemas import MODEL_ALIASES, Overrides

from .controller import CommitGptController
from .service import GitService


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-s",
    "--suggestions",
    type=click.IntRange(MIN_SUGGESTIONS, MAX_SUGGESTIONS),
    default=None,
    help="The amount of suggestions ChatGPT should generate.",
)
@click.option(
    "-i/-I",
    "--ignore-space/--no-ignore-space",
    default=None,
    help="Ignore space change and blank lines in the git diff.",
)
@click.option(
    "-t",
    "--max-tokens",
    type=click.IntRange(MIN_MAX_TOKENS, MAX_MAX_TOKENS),
    default=None,
    help="The maximum amount of tokens ChatGPT may use per suggestion.",
)
@click.option(
    "-m",
    "--model",
    type=click.Choice(sorted(MODEL_ALIASES), case_sensitive=False),
    default=None,
    help="The model which should be used for ChatGPT.",
)
@click.option(
    "-r",
    "--reason",
    default="",
    help="Why the change was made; passed to ChatGPT along with the diff.",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(VERSION, "-V", "--version", prog_name="commitgpt")
@click.argument("paths", nargs=-1)
def run_commitgpt(
    suggestions: Optional[int],
    ignore_space: Optional[bool],
    max_tokens: Optional[int],
    model: Optional[str],
    reason: str,
    debug: bool,
    paths: tuple[str, ...],
) -> None:
    """Generate commit messages for the staged changes and commit one.

    \b
    Workflow:
      1. Reads `git diff --staged` (limited to PATHS when given).
      2. Asks ChatGPT for several commit message suggestions.
      3. Lets you pick one, then runs `git commit --edit` with it.
      4. If the commit fails you can pick again or cancel.

    \b
    Configuration:
      ~/.config/commitgpt/config.toml (or $XDG_CONFIG_HOME/commitgpt/config.toml)
      must define api_key. OPENAI_ prefixed environment variables and a .env
      file override the file; options given here override both.
    """
    if debug:
        set_commitgpt_log_level("DEBUG")

    load_dotenv()

    overrides = Overrides(
        suggestions=suggestions,
        ignore_space=ignore_space,
        max_tokens=max_tokens,
        model=model,
    )
    controller = CommitGptController(
        GitService(),
        overrides=overrides,
        paths=paths,
        reason=reason,
    )

    sys.exit(controller.run())


if __name__ == "__main__":
    run_commitgpt()
