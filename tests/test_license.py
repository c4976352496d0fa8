import json

import pytest
from conftest import NPM_HOST, encoded

from pkgscore.analyzers.license import (
    check_license_compatibility,
    extract_license_from_readme,
    is_compatible,
)
from pkgscore.config import Settings

REPO = "https://github.com/owner/repo"
LICENSE_PATH = "/repos/owner/repo/contents/LICENSE"
MANIFEST_PATH = "/repos/owner/repo/contents/package.json"
README_PATH = "/repos/owner/repo/readme"


def test_missing_token_short_circuits(fake_api, client):
    result = check_license_compatibility(REPO, settings=Settings(), client=client)

    assert result.score == 0
    assert result.details == "GitHub token not set"
    assert fake_api.requests == []


def test_license_file_wins(fake_api, client, settings):
    fake_api.github(LICENSE_PATH, json=encoded("MIT License\n\nCopyright (c) 2024 Someone\n"))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 1
    assert result.details.startswith("License found: MIT License")
    assert result.details == "License found: MIT License. Compatible: true"
    assert fake_api.paths() == [LICENSE_PATH]


def test_requests_carry_the_token(fake_api, client, settings):
    fake_api.github(LICENSE_PATH, json=encoded("ISC License"))

    check_license_compatibility(REPO, settings=settings, client=client)

    assert fake_api.requests[0].headers["Authorization"] == "Bearer test-token"


def test_incompatible_license_file(fake_api, client, settings):
    fake_api.github(LICENSE_PATH, json=encoded("Proprietary. All rights reserved.\n"))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 0
    assert result.details == "License found: Proprietary. All rights reserved.. Compatible: false"


def test_falls_back_to_manifest(fake_api, client, settings):
    fake_api.github(MANIFEST_PATH, json=encoded(json.dumps({"name": "pkg", "license": "BSD-3-Clause"})))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 1
    assert result.details == "License found: BSD-3-Clause. Compatible: true"
    assert fake_api.paths() == [LICENSE_PATH, MANIFEST_PATH]


def test_manifest_object_license(fake_api, client, settings):
    manifest = {"name": "pkg", "license": {"type": "Apache-2.0", "url": "https://example.com"}}
    fake_api.github(MANIFEST_PATH, json=encoded(json.dumps(manifest)))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 1
    assert result.details.startswith("License found: Apache-2.0")


def test_falls_back_to_readme(fake_api, client, settings):
    fake_api.github(MANIFEST_PATH, json=encoded(json.dumps({"name": "pkg"})))
    fake_api.github(README_PATH, json=encoded("# pkg\n\nDoes things.\n\n## License\n\nApache-2.0\n"))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 1
    assert result.details == "License found: Apache-2.0. Compatible: true"
    assert fake_api.paths() == [LICENSE_PATH, MANIFEST_PATH, README_PATH]


def test_invalid_manifest_falls_back_to_readme(fake_api, client, settings):
    fake_api.github(MANIFEST_PATH, json=encoded("{not json"))
    fake_api.github(README_PATH, json=encoded("## LICENSE\nMIT\n"))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 1
    assert result.details == "License found: MIT. Compatible: true"


def test_server_error_on_license_file_still_falls_back(fake_api, client, settings):
    fake_api.github(LICENSE_PATH, json={"message": "error"}, status=500)
    fake_api.github(MANIFEST_PATH, json=encoded(json.dumps({"license": "ISC"})))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 1


def test_no_license_anywhere(fake_api, client, settings):
    fake_api.github(README_PATH, json=encoded("# pkg\n\nNo legal text here.\n"))

    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 0
    assert result.details == "No license information found"


def test_readme_failure_is_reported(fake_api, client, settings):
    result = check_license_compatibility(REPO, settings=settings, client=client)

    assert result.score == 0
    assert result.details.startswith("Error checking license: ")
    assert fake_api.paths() == [LICENSE_PATH, MANIFEST_PATH, README_PATH]


def test_npm_package_without_repository(fake_api, client, settings):
    fake_api.add(NPM_HOST, "/foo", json={"name": "foo", "versions": {}})

    result = check_license_compatibility("https://www.npmjs.com/package/foo", settings=settings, client=client)

    assert result.score == 0
    assert result.details == "No GitHub repository found for npm package"
    assert [r.url.host for r in fake_api.requests] == [NPM_HOST]


def test_npm_package_resolves_to_github(fake_api, client, settings):
    fake_api.add(
        NPM_HOST,
        "/foo",
        json={"name": "foo", "repository": {"type": "git", "url": "git+https://github.com/owner/repo.git"}},
    )
    fake_api.github(LICENSE_PATH, json=encoded("The Unlicense\n"))

    result = check_license_compatibility("https://www.npmjs.com/package/foo", settings=settings, client=client)

    assert result.score == 1
    assert fake_api.paths() == ["/foo", LICENSE_PATH]


def test_npm_registry_failure(fake_api, client, settings):
    result = check_license_compatibility("https://www.npmjs.com/package/missing", settings=settings, client=client)

    assert result.score == 0
    assert result.details.startswith("Error checking license: ")


def test_non_repository_url(fake_api, client, settings):
    result = check_license_compatibility("https://example.com/whatever", settings=settings, client=client)

    assert result.score == 0
    assert result.details.startswith("Error checking license: ")
    assert fake_api.requests == []


@pytest.mark.parametrize(
    "text, expected",
    [
        ("MIT", True),
        ("mit license", True),
        ("Apache-2.0", True),
        ("Apache 2.0", True),
        ("BSD 3-Clause", True),
        ("bsd 2 clause", True),
        ("GPL-3.0-or-later", True),
        ("LGPL-2.1", True),
        ("This is free and unencumbered software: see the Unlicense", True),
        ("ISC", True),
        ("Proprietary", False),
        ("MPL-2.0", False),
        ("", False),
    ],
)
def test_is_compatible(text, expected):
    assert is_compatible(text) is expected


def test_readme_section_stops_at_next_heading():
    readme = "# Project\n\nIntro.\n\n### license\n\nISC\n\nMore words.\n\n## Contributing\n\nPRs welcome.\n"

    assert extract_license_from_readme(readme) == "ISC\n\nMore words."


def test_readme_section_runs_to_end_of_document():
    assert extract_license_from_readme("#License\nGPL-2.0") == "GPL-2.0"


def test_readme_without_license_heading():
    assert extract_license_from_readme("# Project\n\nLicensed under MIT somewhere.\n") is None


def test_readme_with_empty_license_section():
    assert extract_license_from_readme("## License\n\n## Next\ntext") is None
