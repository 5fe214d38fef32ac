from monarchcli import version


def test_version_info_reports_version():
    assert version.version_info()["version"] == "0.3.1"


def test_version_info_defaults():
    info = version.version_info()
    assert info["commit"] == "none"
    assert info["date"] == "unknown"
    assert info["built_by"] == "unknown"


def test_version_info_matches_module_constants():
    info = version.version_info()
    assert info == {
        "version": version.VERSION,
        "commit": version.COMMIT,
        "date": version.DATE,
        "built_by": version.BUILT_BY,
    }


def test_version_info_is_a_fresh_copy():
    first = version.version_info()
    first["version"] = "changed"
    assert version.version_info()["version"] == version.VERSION