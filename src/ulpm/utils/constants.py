"""Constants used throughout ulpm."""

# Files written into the project directory
MANIFEST_NAME = "ulpm.json"
PACKAGE_JSON_NAME = "package.json"
LICENSE_FILE_NAME = "LICENSE.txt"

# Manifest defaults
DEFAULT_PROJECT_VERSION = "v0.0.1"
DEFAULT_AUTHOR = "Name <email@example.com>"
DEFAULT_JS_MAIN = "src/main.js"
JS_MAIN_SOURCE = "console.log('Hello World!');\n"

# License ids with no downloadable text
NO_LICENSE = "None"
CUSTOM_LICENSE = "Custom"

LICENSE_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/spdx/license-list-data/master/text/{license_id}.txt"
)

# HTTP client settings (in seconds)
HTTP_CLIENT_TIMEOUT = 30
HTTP_MAX_RETRIES = 3
HTTP_RETRY_BACKOFF = 0.5

# Built-in catalog of supported ecosystems
DEFAULT_LANGUAGES: dict[str, dict[str, list[str]]] = {
    "javascript": {
        "package_managers": ["npm", "yarn", "pnpm"],
        "js_runtimes": ["node", "bun", "deno", "qjs", "d8", "jsc", "js"],
    },
    "rust": {"package_managers": []},
    "c++": {"package_managers": []},
}

DEFAULT_LICENSES: list[str] = [
    "Apache-2.0",
    "BSD-2-Clause",
    "BSD-3-Clause",
    "GPL-2.0-only",
    "GPL-2.0-or-later",
    "GPL-3.0-only",
    "GPL-3.0-or-later",
    "LGPL-2.1-only",
    "LGPL-2.1-or-later",
    "LGPL-3.0-only",
    "LGPL-3.0-or-later",
    "MIT",
    "MPL-2.0",
    "AGPL-3.0-only",
    "AGPL-3.0-or-later",
    "EPL-1.0",
    "EPL-2.0",
    "CDDL-1.0",
    "Unlicense",
    "CC0-1.0",
    CUSTOM_LICENSE,
]


class Language:
    """Language name constants."""

    JAVASCRIPT = "javascript"
    RUST = "rust"
    CPP = "c++"
