"""
Release notes rendering.

The template is fixed; only the change history and the plugin identity
vary between releases.
"""

import logging

from dprint_json.config import ReleaseSettings

from .changelog import ChangeLogGenerator

logger = logging.getLogger(__name__)


def plugin_url(version: str, settings: ReleaseSettings | None = None) -> str:
    """URL the plugin for ``version`` is installed from."""
    settings = settings or ReleaseSettings()
    return f"{settings.plugin_url_base.rstrip('/')}/{settings.plugin_name}-{version}.wasm"


def render_release_notes(version: str, changelog: str, settings: ReleaseSettings | None = None) -> str:
    """
    Render the release notes Markdown.

    Args:
        version: Version being released (e.g. "0.9.0")
        changelog: Change history text for the version
        settings: Plugin identity (defaults to the JSON plugin)

    Returns:
        Markdown with Changes, Install and JS Formatting API sections
    """
    settings = settings or ReleaseSettings()
    key = settings.config_key

    return f"""## Changes

{changelog}

## Install

[Install](https://dprint.dev/install/) and [setup](https://dprint.dev/setup/) dprint.

Then in your project's dprint configuration file:

1. Specify the plugin url in the `"plugins"` array (can be done via `dprint config add {settings.plugin_name}`).
2. Add a `"{key}"` configuration property if desired.
   ```jsonc
   {{
     // ...etc...
     "{key}": {{
       // {key} config goes here
     }},
     "plugins": [
       "{plugin_url(version, settings)}"
     ]
   }}
   ```

## JS Formatting API

* [JS Formatter](https://github.com/dprint/js-formatter) - Browser/Deno and Node
* [npm package](https://www.npmjs.com/package/{settings.npm_package})
"""


def generate_release_notes(
    version: str,
    generator: ChangeLogGenerator,
    settings: ReleaseSettings | None = None,
) -> str:
    """Ask the changelog aggregator for ``version``'s history and render the notes."""
    changelog = generator.generate_change_log(version)
    logger.debug("Rendering release notes for %s (%d changelog chars)", version, len(changelog))
    return render_release_notes(version, changelog, settings)
