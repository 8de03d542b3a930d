import logging

from postmatter.cli import build_parser, main


def write_posts(directory):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "good.md").write_text("---\ntitle: Good\n---\nbody")
    (directory / "bare.md").write_text("title: Bare\n\nbody")


def test_main_returns_zero_when_only_warnings(tmp_path, caplog):
    posts = tmp_path / "posts"
    write_posts(posts)

    with caplog.at_level(logging.INFO):
        status = main([str(posts), "--workers", "1"])

    assert status == 0
    assert "bare: front matter has no opening '---' delimiter" in caplog.text
    assert "Checked 2 posts" in caplog.text
    assert "1 with warnings, 0 unreadable" in caplog.text


def test_main_returns_one_when_a_file_is_unreadable(tmp_path, caplog):
    posts = tmp_path / "posts"
    write_posts(posts)
    (posts / "broken.md").write_bytes(b"---\ntitle: \xff\xfe\n---\n")

    with caplog.at_level(logging.INFO):
        status = main([str(posts), "--workers", "2"])

    assert status == 1
    assert "broken.md" in caplog.text
    assert "1 unreadable" in caplog.text


def test_main_with_missing_directory_succeeds(tmp_path):
    assert main([str(tmp_path / "missing")]) == 0


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.content_dir is None
    assert args.workers >= 1
