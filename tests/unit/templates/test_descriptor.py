import pytest
from pydantic import ValidationError

from themeflow.constants import ContentType
from themeflow.templates import ContentDescriptor, InvalidDescriptorError


class TestContentDescriptor:
    """Tests for ContentDescriptor validation and normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("single", ContentType.SINGLE),
            ("Single", ContentType.SINGLE),
            (" page ", ContentType.PAGE),
            ("front-page", ContentType.FRONT_PAGE),
            ("404", ContentType.NOT_FOUND),
        ],
    )
    def test_known_content_types_are_normalized(self, raw, expected):
        descriptor = ContentDescriptor(content_type=raw)

        assert descriptor.content_type is expected
        assert descriptor.category == expected.value

    def test_custom_content_type_is_kept_lower_case(self):
        descriptor = ContentDescriptor(content_type="Portfolio")

        assert descriptor.content_type == "portfolio"
        assert descriptor.category == "portfolio"

    def test_descriptor_is_immutable(self):
        descriptor = ContentDescriptor(content_type="single", type_slug="post")

        with pytest.raises(ValidationError):
            descriptor.type_slug = "page"

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            ContentDescriptor(content_type="single", slug="oops")

    @pytest.mark.parametrize("slug", ["a/b", "..", "a\\b", "../secret"])
    def test_slugs_must_be_single_segments(self, slug):
        with pytest.raises(ValidationError, match="single path segment"):
            ContentDescriptor(content_type="page", path_slug=slug)

    @pytest.mark.parametrize("slug", ["a\x00b", "tab\there", "bell\x7f"])
    def test_slugs_reject_control_characters(self, slug):
        with pytest.raises(InvalidDescriptorError, match="control characters"):
            ContentDescriptor.create("page", path_slug=slug)

    def test_negative_depth_is_rejected(self):
        with pytest.raises(ValidationError):
            ContentDescriptor(content_type="page", depth=-1)

    @pytest.mark.parametrize("content_type", ["", "   ", None, 3])
    def test_create_wraps_validation_errors(self, content_type):
        with pytest.raises(InvalidDescriptorError, match="Invalid content descriptor"):
            ContentDescriptor.create(content_type)

    def test_invalid_descriptor_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            ContentDescriptor.create("single", path_slug="a/b")

    def test_fields_expose_pattern_tokens(self):
        descriptor = ContentDescriptor.create("single", type_slug="post", path_slug="hello-world", depth=1)

        assert descriptor.fields() == {"type": "single", "type_slug": "post", "path_slug": "hello-world"}

    def test_str(self):
        descriptor = ContentDescriptor.create("page", path_slug="about", depth=0)

        assert str(descriptor) == "page path_slug=about depth=0"
