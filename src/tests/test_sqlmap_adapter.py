import json

from engine.models import JobStatus, ScanOptions, ScanTarget
from tools.sqlmap_adapter import extract_payload
from utils.scripts_utils import build_form_data, build_json_data


def test_build_form_data():
    assert build_form_data("a,b,c") == "a=1*&b=test&c=test"
    assert build_form_data(" user , pass") == "user=1*&pass=test"


def test_build_json_data():
    assert build_json_data("a,b") == '{"a":"1*","b":"test"}'
    assert json.loads(build_json_data("q")) == {"q": "1*"}


def test_fuzz_marker_replaced_once(adapter, options):
    target = ScanTarget(url="http://x.local/?a=FUZZ&b=FUZZ")
    command = adapter.build_command(target, options)
    assert command.args[:2] == ["-u", "http://x.local/?a=1*&b=FUZZ"]
    assert command.data is None
    assert "--data" not in command.args


def test_fixed_arguments(adapter, fuzz_target):
    command = adapter.build_command(fuzz_target, ScanOptions(level=3, risk=2, threads=4))
    assert command.args[2:] == [
        "--batch",
        "--stop",
        "--level=3",
        "--risk=2",
        "--threads=4",
        "--technique=BEUSQ",
        "--method=GET",
    ]


def test_time_based_technique_and_method_uppercased(adapter):
    target = ScanTarget(url="http://x.local/login", http_method="post", form_params="user,pass")
    command = adapter.build_command(target, ScanOptions(time_based=True))
    assert "--technique=BEUSTQ" in command.args
    assert "--method=POST" in command.args


def test_form_params_become_data(adapter, options):
    target = ScanTarget(url="http://x.local/login", http_method="POST", form_params="a,b,c")
    command = adapter.build_command(target, options)
    assert command.args[:4] == ["-u", "http://x.local/login", "--data", "a=1*&b=test&c=test"]
    assert not any(arg.startswith("--headers=Content-Type") for arg in command.args)


def test_body_params_take_precedence_and_set_content_type(adapter, options):
    target = ScanTarget(
        url="http://x.local/api",
        http_method="POST",
        form_params="ignored",
        body_params="a,b",
        headers={"Authorization": "Bearer t", "X-Env": "qa"},
    )
    command = adapter.build_command(target, options)
    data_index = command.args.index("--data")
    assert json.loads(command.args[data_index + 1]) == {"a": "1*", "b": "test"}
    header_args = {arg for arg in command.args if arg.startswith("--headers=")}
    assert header_args == {
        "--headers=Authorization: Bearer t",
        "--headers=X-Env: qa",
        "--headers=Content-Type: application/json",
    }


def test_not_actionable_without_params_or_marker(adapter, options):
    assert adapter.build_command(ScanTarget(url="http://x.local/?id=1"), options) is None


def test_extract_payload_first_match_wins():
    output = "\n".join([
        "[INFO] GET parameter 'id' is vulnerable",
        "---",
        "    Type: boolean-based blind",
        "  Payload: 1' OR '1'='1",
        "    Payload: id=1 UNION ALL SELECT NULL",
        "---",
    ])
    assert extract_payload(output) == "1' OR '1'='1"


def test_extract_payload_without_match():
    assert extract_payload("") == ""
    assert extract_payload("[CRITICAL] all tested parameters do not appear to be injectable") == ""
    assert extract_payload("no Payload: here") == ""


def test_parse_output(adapter):
    outcome = adapter.parse_output("Payload: id=1 AND 5=5\n")
    assert outcome.status == JobStatus.DONE
    assert outcome.vulnerable is True
    assert outcome.payload == "id=1 AND 5=5"

    outcome = adapter.parse_output("nothing found")
    assert outcome.status == JobStatus.DONE
    assert outcome.vulnerable is False
    assert outcome.payload == ""


def test_extract_payload_splits_on_newlines_only():
    assert extract_payload("noise\x0cPayload: x") == ""
    assert extract_payload("noise Payload: x") == ""
    assert extract_payload("[INFO] testing\r\n    Payload: id=1 AND 1=1\r\n") == "id=1 AND 1=1"
