"""Profile Loader for building ProfileSets from shared configuration files.

Two INI files are read:

- the config file (``AWS_CONFIG_FILE``, default ``~/.aws/config``), where
  profiles are declared as ``[default]`` or ``[profile NAME]``
- the credentials file (``AWS_SHARED_CREDENTIALS_FILE``, default
  ``~/.aws/credentials``), where profiles are declared as ``[NAME]``

Settings from the credentials file override settings of the same key in the
config file. A missing file simply contributes no profiles.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

import yaml

from profile_resolver.exceptions import ProfileParseError
from profile_resolver.profiles.base import DEFAULT_PROFILE_NAME, Profile, ProfileSet
from profile_resolver.shims.os_shim import Env, Fs

logger = logging.getLogger(__name__)

ENV_PROFILE = "AWS_PROFILE"
ENV_CONFIG_FILE = "AWS_CONFIG_FILE"
ENV_CREDENTIALS_FILE = "AWS_SHARED_CREDENTIALS_FILE"

DEFAULT_CONFIG_FILE = "~/.aws/config"
DEFAULT_CREDENTIALS_FILE = "~/.aws/credentials"

PROFILE_PREFIX = "profile"

# configparser treats its default section specially; use a name no real
# file can contain so "[DEFAULT]" is parsed like any other section.
_NO_DEFAULT_SECTION = "\x00"


class ProfileLoader:
    """Loads a ProfileSet through the file system and environment shims."""

    def __init__(self, fs: Fs, env: Env):
        self._fs = fs
        self._env = env

    async def load(self) -> ProfileSet:
        """Load and merge the config and credentials files.

        Returns:
            The merged ProfileSet (possibly empty)

        Raises:
            ProfileParseError: If either file exists but cannot be parsed
        """
        config_path = self.config_file_path()
        credentials_path = self.credentials_file_path()

        profiles: dict[str, dict[str, str]] = {}

        config_text = await self._read(config_path)
        if config_text is not None:
            profiles.update(self.parse_config(config_text, config_path))

        credentials_text = await self._read(credentials_path)
        if credentials_text is not None:
            for name, properties in self.parse_credentials(credentials_text, credentials_path).items():
                profiles.setdefault(name, {}).update(properties)

        selected = self._env.get(ENV_PROFILE) or DEFAULT_PROFILE_NAME
        logger.debug(
            "Loaded %d profile(s) from %s and %s (selected: %s)",
            len(profiles), config_path, credentials_path, selected,
        )

        return ProfileSet(
            profiles={
                name: Profile(name=name, properties=properties)
                for name, properties in profiles.items()
            },
            selected_profile_name=selected,
        )

    def config_file_path(self) -> str:
        return self._expand_home(self._env.get(ENV_CONFIG_FILE) or DEFAULT_CONFIG_FILE)

    def credentials_file_path(self) -> str:
        return self._expand_home(self._env.get(ENV_CREDENTIALS_FILE) or DEFAULT_CREDENTIALS_FILE)

    def parse_config(self, text: str, path: str = "<config>") -> dict[str, dict[str, str]]:
        """Parse a config file into profile properties keyed by profile name.

        Only ``[default]`` and ``[profile NAME]`` sections declare profiles.
        When both ``[default]`` and ``[profile default]`` are present, the
        latter wins.
        """
        sections = self._parse_ini(text, path)

        profiles: dict[str, dict[str, str]] = {}
        prefixed_default = False

        for section, properties in sections.items():
            parts = section.split(None, 1)
            if len(parts) == 2 and parts[0] == PROFILE_PREFIX:
                name = parts[1].strip()
                if name == DEFAULT_PROFILE_NAME:
                    if name in profiles and not prefixed_default:
                        logger.debug(
                            "Both [default] and [profile default] found in %s; using [profile default]",
                            path,
                        )
                    prefixed_default = True
                profiles[name] = properties
            elif section == DEFAULT_PROFILE_NAME:
                if prefixed_default:
                    logger.debug(
                        "Both [default] and [profile default] found in %s; using [profile default]",
                        path,
                    )
                else:
                    profiles[DEFAULT_PROFILE_NAME] = properties
            else:
                logger.debug(
                    "Ignoring section [%s] in %s: config profiles must be named "
                    "[profile NAME] or [default]",
                    section, path,
                )

        return profiles

    def parse_credentials(self, text: str, path: str = "<credentials>") -> dict[str, dict[str, str]]:
        """Parse a credentials file. Section names are used verbatim."""
        return self._parse_ini(text, path)

    def _parse_ini(self, text: str, path: str) -> dict[str, dict[str, str]]:
        parser = configparser.ConfigParser(
            interpolation=None,
            strict=False,
            delimiters=("=",),
            comment_prefixes=("#", ";"),
            default_section=_NO_DEFAULT_SECTION,
        )
        # Keys are case sensitive
        parser.optionxform = str  # type: ignore[assignment,method-assign]

        try:
            parser.read_string(text, source=path)
        except configparser.Error as e:
            raise ProfileParseError(path, str(e)) from e

        sections: dict[str, dict[str, str]] = {}
        for section in parser.sections():
            name = section.strip()
            properties = {
                key.strip(): value.strip()
                for key, value in parser.items(section)
            }
            sections.setdefault(name, {}).update(properties)
        return sections

    async def _read(self, path: str) -> str | None:
        try:
            data = await self._fs.read_to_end(path)
        except FileNotFoundError:
            logger.debug("Profile file %s not found, skipping", path)
            return None
        except OSError as e:
            logger.warning("Could not read profile file %s, skipping: %s", path, e)
            return None

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProfileParseError(path, f"file is not valid UTF-8: {e}") from e

    def _expand_home(self, path: str) -> str:
        if not path.startswith("~"):
            return path

        home = self._env.get("HOME") or self._env.get("USERPROFILE")
        if home is None:
            logger.debug("No home directory available to expand %s", path)
            return path

        return str(Path(home) / path[1:].lstrip("/\\"))


async def load_profile_set(fs: Fs, env: Env) -> ProfileSet:
    """Convenience function to load a ProfileSet through the given shims.

    Args:
        fs: File system shim
        env: Environment shim

    Returns:
        Loaded ProfileSet
    """
    loader = ProfileLoader(fs, env)
    return await loader.load()


def profile_set_to_yaml(profile_set: ProfileSet) -> str:
    """Serialize a ProfileSet to YAML for display."""
    data: dict[str, Any] = {
        "selected_profile": profile_set.selected_profile(),
        "profiles": {
            profile.name: dict(profile.properties)
            for profile in profile_set.iter_profiles()
        },
    }
    return yaml.dump(data, default_flow_style=False, sort_keys=False)
