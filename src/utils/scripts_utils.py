# src/utils/scripts_utils.py
import json

FUZZ_MARKER = "FUZZ"
FUZZ_VALUE = "1*"
PROBE_VALUE = "test"


def _param_names(params):
    return [p.strip() for p in params.split(",")]


def build_form_data(params):
    """
    Build a form encoded body from a comma separated list of parameter names.
    The first parameter gets the sqlmap injection marker, the rest a probe value.
    """
    pairs = []
    for i, name in enumerate(_param_names(params)):
        value = FUZZ_VALUE if i == 0 else PROBE_VALUE
        pairs.append(f"{name}={value}")
    return "&".join(pairs)


def build_json_data(params):
    """
    Build a JSON body from a comma separated list of parameter names, using the
    same first-parameter-is-fuzzed rule as build_form_data.
    """
    data = {}
    for i, name in enumerate(_param_names(params)):
        data[name] = FUZZ_VALUE if i == 0 else PROBE_VALUE
    return json.dumps(data, separators=(",", ":"))


def has_fuzz_marker(url):
    return FUZZ_MARKER in url


def replace_fuzz_marker(url):
    return url.replace(FUZZ_MARKER, FUZZ_VALUE, 1)
