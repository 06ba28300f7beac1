VERSION = "0.1.0"

DIFF_CHAR_LIMIT = 3800

DEFAULT_SUGGESTIONS = 5
MIN_SUGGESTIONS = 1
MAX_SUGGESTIONS = 10

DEFAULT_IGNORE_SPACE = True

DEFAULT_MAX_TOKENS = 400
MIN_MAX_TOKENS = 1
MAX_MAX_TOKENS = 128000

DEFAULT_TIMEOUT = 60.0

CONFIG_DIR_NAME = "commitgpt"
CONFIG_FILE_NAME = "config.toml"
ENV_PREFIX = "OPENAI_"

DEFAULT_CONTEXT_PREFIX = """You are a helpful assistant which helps to write commit messages based on the given diff and reason.
The first line is explaining why there are specific changes and the other lines describes what have been changed.
Follow the following git commit message convention:
<type>: <description>

<why>

Changes:
<what>"""

SETTINGS_REMEDIATION = """tldr; missing or invalid config `{path}`
```toml
api_key = "YOUR_OPENAI_API_KEY"
```

The configuration file for commitgpt could not be found or is invalid.
The expected configuration file is located at `{path}`.

The possible reasons for this error could be:

- The configuration file is not present at the expected location.
- The configuration file does not contain the required `api_key` key-value pair.
- A value is out of range: `suggestions` must be within 1-10 and `max_tokens` within 1-128000.
- `model` names an unknown model.
- The file is not valid TOML.

The directory can be moved by setting XDG_CONFIG_HOME, and every field can be
overridden with an OPENAI_ prefixed environment variable (e.g. OPENAI_API_KEY).

You can create an API key at https://platform.openai.com/account/api-keys.

Details: {details}"""
