import pytest
from pydantic import ValidationError

from core.registry import PackageListResponse, RemotePackage


def test_remote_package_coerces_and_ignores_extras():
    pkg = RemotePackage.model_validate(
        {
            "name": "foo",
            "title": "Foo",
            "version": {
                "version": 2,
                "compatible_core_version": 13,
                "notes": "   ",
                "manifest": "https://x/module.json",
            },
        }
    )
    assert pkg.version.version == "2"
    assert pkg.version.compatible_core_version == "13"
    assert pkg.version.notes is None


@pytest.mark.parametrize(
    "entry",
    [
        {"name": "  ", "version": {"version": "1"}},
        {"name": "foo", "version": "1.0.0"},
        {"name": "foo"},
        {"name": "foo", "version": {"version": True}},
    ],
)
def test_remote_package_rejects_malformed(entry):
    with pytest.raises(ValidationError):
        RemotePackage.model_validate(entry)


def test_envelope_ok_flag():
    assert PackageListResponse(status="success", packages=[]).ok
    assert not PackageListResponse(status="failure", packages=[1]).ok
