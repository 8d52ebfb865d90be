import json
import logging
import os
from typing import Any
from typing import Dict
from typing import Optional

from davclient.lib import error

"""
Configuration file reading, and the lookup order used by get_davclient.

A configuration file is JSON (or YAML, if pyyaml is installed) with one
object per section::

    {
        "default": {"dav_url": "https://dav.example.com/", "dav_user": "me", "dav_pass": "secret"},
        "work": {"inherits": "default", "dav_user": "me@work"}
    }
"""

log = logging.getLogger(__name__)

ENV_PREFIX = "DAV_"
## connection parameters taken from the environment, DAV_URL etc
ENV_KEYS = ("url", "username", "password")


def config_section(config: Dict[str, Any], section: str = "default") -> Dict[str, Any]:
    if section in config and "inherits" in config[section]:
        ret = config_section(config, config[section]["inherits"])
    else:
        ret = {}
    if section in config:
        ret.update(config[section])
    return ret


def read_config(fn: Optional[str]) -> Optional[Dict[str, Any]]:
    if not fn:
        cfgdir = f"{os.environ.get('HOME', '/')}/.config/"
        for config_file in (
            f"{cfgdir}/davclient/davclient.conf",
            f"{cfgdir}/davclient/davclient.yaml",
            f"{cfgdir}/davclient/davclient.json",
            "/etc/davclient/davclient.conf",
        ):
            cfg = read_config(config_file)
            if cfg:
                return cfg
        return None

    try:
        try:
            with open(fn, "rb") as config_file:
                return json.load(config_file)
        except json.decoder.JSONDecodeError:
            ## Late import, pyyaml is not among the requirements
            try:
                import yaml

                try:
                    with open(fn, "rb") as config_file:
                        return yaml.load(config_file, yaml.SafeLoader)
                except yaml.YAMLError:
                    log.error(
                        f"config file {fn} exists but is neither valid json nor yaml.  Check the syntax."
                    )
            except ImportError:
                log.error(
                    f"config file {fn} exists but is not valid json, and pyyaml is not installed."
                )

    except FileNotFoundError:
        log.debug(f"no config file found at {fn}")
    except ValueError:
        log.error("error in config file.  It will be ignored", exc_info=True)
    return {}


def connection_params(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section_name: Optional[str] = None,
    environment: bool = True,
    **config_data,
) -> Dict[str, Any]:
    """
    Find the parameters for a client, in this order:

    * The keyword arguments given
    * The environment variables `DAV_URL`, `DAV_USERNAME` and
      `DAV_PASSWORD`; other `DAV_*` variables are ignored
    * A configuration file, named by `DAV_CONFIG_FILE` or found in one
      of the default locations, section `DAV_CONFIG_SECTION` or "default"

    Raises ConfigurationError if none of them gives anything.
    """
    if config_data:
        return config_data

    if environment:
        conf = {}
        for key in ENV_KEYS:
            value = os.environ.get(ENV_PREFIX + key.upper())
            if value:
                conf[key] = value
        if conf:
            return conf
        if not config_file:
            config_file = os.environ.get(ENV_PREFIX + "CONFIG_FILE")
        if not config_section_name:
            config_section_name = os.environ.get(ENV_PREFIX + "CONFIG_SECTION")

    if check_config_file:
        cfg = read_config(config_file)
        if cfg:
            section = config_section(cfg, config_section_name or "default")
            conn_params = {}
            for k in section:
                if k.startswith("dav_") and section[k]:
                    key = k[4:]
                    if key == "pass":
                        key = "password"
                    if key == "user":
                        key = "username"
                    conn_params[key] = section[k]
            if conn_params:
                return conn_params

    raise error.ConfigurationError(reason="no connection parameters found")
