import json

import pytest

from atlaskit.rpc.errdetails import Code, TargetInfo, new_target_info, newf


def test_ok_code():
    info = new_target_info(Code.OK, "", "")
    assert info.code == Code.OK
    data = info.to_json()
    assert data == '{"code":"OK"}'
    assert TargetInfo.from_json(data).code == info.code


@pytest.mark.parametrize("data", ["{}", '{"code": null}', '{"code": ""}'])
def test_missing_code_means_ok(data):
    assert TargetInfo.from_json(data).code == Code.OK


def test_unimplemented_code():
    info = new_target_info(Code.UNIMPLEMENTED, "", "")
    assert info.code == Code.UNIMPLEMENTED
    data = info.to_json()
    assert data == '{"code":"NOT_IMPLEMENTED"}'
    assert TargetInfo.from_json(data).code == info.code
    assert TargetInfo.from_json('{"code": "NOT_IMPLEMENTED"}').code == Code.UNIMPLEMENTED


def test_unknown_code():
    info = new_target_info(Code.UNKNOWN, "", "")
    data = info.to_json()
    assert data == '{"code":"UNKNOWN"}'
    assert TargetInfo.from_json(data).code == info.code
    assert TargetInfo.from_json('{"code": "NEW_CODE"}').code == Code.UNKNOWN


def test_code_name_is_case_insensitive():
    assert TargetInfo.from_json('{"code": "not_found"}').code == Code.NOT_FOUND


def test_message_and_target_round_trip():
    info = newf(Code.INVALID_ARGUMENT, "name", "bad value %q" .replace("%q", "%r"), "x")
    assert info.message == "bad value 'x'"
    data = info.to_json()
    assert json.loads(data) == {
        "code": "INVALID_ARGUMENT",
        "message": "bad value 'x'",
        "target": "name",
    }
    assert TargetInfo.from_json(data) == info


def test_newf_without_args():
    assert newf(Code.OK, "t", "100%").message == "100%"


def test_from_json_rejects_non_string_values():
    with pytest.raises(ValueError):
        TargetInfo.from_json('{"code": 5}')


def test_from_json_rejects_non_object():
    with pytest.raises(ValueError):
        TargetInfo.from_json("[1, 2]")