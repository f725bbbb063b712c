from vramsply_installer.kernel.artifacts import ChecksumManifest, ReleaseAsset, manifest_url
from vramsply_installer.kernel.platform import resolve_platform

DIGEST_A = "a" * 64
DIGEST_B = "b" * 64


def test_parses_two_space_separated_records():
    manifest = ChecksumManifest.parse(
        f"{DIGEST_A}  vramsply-x86_64-unknown-linux-gnu\n"
        f"{DIGEST_B}  vramsply-aarch64-apple-darwin\n"
    )
    assert len(manifest) == 2
    assert manifest.lookup("vramsply-x86_64-unknown-linux-gnu") == DIGEST_A
    assert manifest.lookup("vramsply-aarch64-apple-darwin") == DIGEST_B


def test_parses_tab_separated_and_binary_mode_records():
    manifest = ChecksumManifest.parse(
        f"{DIGEST_A}\tvramsply-x86_64-unknown-linux-gnu\n"
        f"{DIGEST_B} *vramsply-aarch64-apple-darwin\n"
    )
    assert manifest.lookup("vramsply-x86_64-unknown-linux-gnu") == DIGEST_A
    assert manifest.lookup("vramsply-aarch64-apple-darwin") == DIGEST_B


def test_digests_are_normalized_to_lowercase():
    manifest = ChecksumManifest.parse(f"{'AB' * 32}  vramsply-x86_64-apple-darwin\n")
    assert manifest.lookup("vramsply-x86_64-apple-darwin") == "ab" * 32


def test_skips_blank_comment_and_malformed_lines():
    manifest = ChecksumManifest.parse(
        "# checksums for v0.1.0\n"
        "\n"
        "garbage-without-filename\n"
        f"{DIGEST_A}  vramsply-x86_64-unknown-linux-gnu\n"
    )
    assert len(manifest) == 1
    assert manifest.lookup("vramsply-x86_64-unknown-linux-gnu") == DIGEST_A


def test_lookup_requires_exact_filename():
    manifest = ChecksumManifest.parse(
        f"{DIGEST_A}  vramsply-x86_64-unknown-linux-gnu.sig\n"
        f"{DIGEST_B}  other-vramsply-x86_64-unknown-linux-gnu\n"
    )
    assert manifest.lookup("vramsply-x86_64-unknown-linux-gnu") is None


def test_conflicting_duplicate_entries_are_unresolvable():
    manifest = ChecksumManifest.parse(
        f"{DIGEST_A}  vramsply-x86_64-unknown-linux-gnu\n"
        f"{DIGEST_B}  vramsply-x86_64-unknown-linux-gnu\n"
    )
    assert manifest.lookup("vramsply-x86_64-unknown-linux-gnu") is None


def test_identical_duplicate_entries_resolve():
    manifest = ChecksumManifest.parse(
        f"{DIGEST_A}  vramsply-x86_64-unknown-linux-gnu\n"
        f"{DIGEST_A}  vramsply-x86_64-unknown-linux-gnu\n"
    )
    assert manifest.lookup("vramsply-x86_64-unknown-linux-gnu") == DIGEST_A


def test_release_asset_urls():
    asset = ReleaseAsset(
        version="v0.1.0",
        target=resolve_platform("Linux", "x86_64"),
        binary_name="vramsply",
    )
    base = "https://github.com/ohone/vram-supply-agent/releases/download/"

    assert asset.filename == "vramsply-x86_64-unknown-linux-gnu"
    assert asset.url(base) == (
        "https://github.com/ohone/vram-supply-agent/releases/download/"
        "v0.1.0/vramsply-x86_64-unknown-linux-gnu"
    )
    assert manifest_url(base, "v0.1.0").endswith("/v0.1.0/SHA256SUMS.txt")
