import pytest

from postmatter.schemas.post import FrontMatterMode, Post
from postmatter.services.front_matter import parse_post
from postmatter.services.writer import dumps_post, front_matter_dict, render_front_matter


def test_render_front_matter_shape():
    text = render_front_matter(
        Post(title="Hello", date="2025-01-01", draft=False, tags=["a", "b"])
    )

    lines = text.splitlines()
    assert lines[0] == "---"
    assert lines[1] == "title: Hello"
    assert lines[2] == "date: '2025-01-01'"
    assert lines[3] == "draft: false"
    assert lines[-1] == "---"
    assert text.endswith("---\n")


def test_front_matter_dict_omits_missing_date():
    assert front_matter_dict(Post(title="A")) == {"title": "A", "draft": False, "tags": []}


@pytest.mark.parametrize(
    "post",
    [
        Post(title="Hello", date="2025-01-01", draft=False, tags=["a", "b"], body="Body text."),
        Post(
            title="true",
            date="2025-12-05T10:00:00.1234567+08:00",
            draft=True,
            tags=[],
            body="",
        ),
        Post(title="Colons: and #hashes", tags=["c#", "yes", "2024"], body="x\n"),
        Post(title="Café naïve, “quoted” inside", tags=["ünïcode"], body="\n\n---\nrule\n"),
        Post(title="", body="untitled"),
        Post(title=" ".join(["word"] * 100), body="long title"),
    ],
)
def test_round_trip_preserves_fields_and_body(post):
    parsed = parse_post(dumps_post(post))

    assert parsed.mode == FrontMatterMode.DELIMITED
    assert parsed.post == post
    assert parsed.post.body == post.body


def test_reconstructing_front_matter_and_body_restores_source():
    source = "---\ntitle:  'Odd   spacing'\ntags:[x,y]\n---\n\nBody with --- inside\n"

    parsed = parse_post(source)

    assert parsed.front_matter_text + parsed.post.body == source
