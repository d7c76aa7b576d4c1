"""
Tests for text-level namespace insertion.
"""

import pytest

from nspatch.namespace_patcher import apply_namespace_patch
from nspatch.nspatch_config import DeclarationStyle
from nspatch.patch_config.plan_manager import PatchStatus
from tests.nspatch.descriptor_samples import (
    FFMPEG_BUILD_GRADLE,
    FFMPEG_BUILD_GRADLE_PATCHED,
    FFMPEG_NAMESPACE,
)


DESCRIPTOR_TEXTS = [
    "android {\n}",
    "android {}",
    "android{\n    compileSdk 33\n}\n",
    "android { compileSdk 33 }",
    "android { // library\n  compileSdk 33\n}\n",
    "android { /* library\n settings */\n    compileSdk 33\n}\n",
    "subprojects {\n    android {\n    }\n}\n",
    FFMPEG_BUILD_GRADLE,
]


class TestApplyNamespacePatch:
    """Tests for apply_namespace_patch."""

    def test_minimal_block(self):
        """The canonical empty block gets one indented declaration."""
        edit = apply_namespace_patch("android {\n}", FFMPEG_NAMESPACE)

        assert edit.status == PatchStatus.PATCHED
        assert edit.changed
        assert edit.text == (
            'android {\n    namespace "com.arthenica.ffmpegkit.flutter.min_gpl"\n}'
        )

    def test_plugin_descriptor(self):
        """The declaration lands right after the android block's opening brace."""
        edit = apply_namespace_patch(FFMPEG_BUILD_GRADLE, FFMPEG_NAMESPACE)

        assert edit.text == FFMPEG_BUILD_GRADLE_PATCHED
        assert edit.text.count("namespace") == 1

    @pytest.mark.parametrize(
        "text",
        [
            FFMPEG_BUILD_GRADLE_PATCHED,
            'android {\n    namespace = "com.example.app"\n}\n',
            "// namespace is set by the host app\nandroid {\n}\n",
            "namespace",
        ],
    )
    def test_text_with_namespace_is_unchanged(self, text):
        """Any text mentioning namespace is left byte-for-byte as it is."""
        edit = apply_namespace_patch(text, FFMPEG_NAMESPACE)

        assert edit.status == PatchStatus.ALREADY_PATCHED
        assert not edit.changed
        assert edit.text == text

    @pytest.mark.parametrize("text", DESCRIPTOR_TEXTS)
    def test_idempotent(self, text):
        """Patching twice gives the same result as patching once."""
        once = apply_namespace_patch(text, FFMPEG_NAMESPACE)
        twice = apply_namespace_patch(once.text, FFMPEG_NAMESPACE)

        assert once.status == PatchStatus.PATCHED
        assert twice.status == PatchStatus.ALREADY_PATCHED
        assert twice.text == once.text
        assert once.text.count("namespace") == 1

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "dependencies {\n}\n",
            "// android {\n",
            'def s = "android {"\n',
            "android\n",
        ],
    )
    def test_missing_block_is_a_no_op(self, text):
        """Without an android block nothing is inserted and nothing is raised."""
        edit = apply_namespace_patch(text, FFMPEG_NAMESPACE)

        assert edit.status == PatchStatus.BLOCK_NOT_FOUND
        assert edit.text == text

    def test_empty_block_on_one_line(self):
        edit = apply_namespace_patch("android {}", "com.example")

        assert edit.text == 'android {\n    namespace "com.example"\n}'

    def test_code_on_brace_line_moves_down(self):
        edit = apply_namespace_patch("android { compileSdk 33 }", "com.example")

        assert edit.text == 'android {\n    namespace "com.example"\n    compileSdk 33 }'

    def test_comment_after_brace_stays_on_its_line(self):
        edit = apply_namespace_patch(
            "android { // library\n  compileSdk 33\n}\n", "com.example"
        )

        assert edit.text == (
            'android { // library\n  namespace "com.example"\n  compileSdk 33\n}\n'
        )

    def test_multi_line_comment_after_brace_is_kept_whole(self):
        edit = apply_namespace_patch(
            "android { /* library\n settings */\n    compileSdk 33\n}\n", "com.example"
        )

        assert edit.text == (
            'android { /* library\n settings */\n    namespace "com.example"\n'
            "    compileSdk 33\n}\n"
        )

    def test_inline_comment_before_code_is_kept(self):
        edit = apply_namespace_patch(
            "android { /* keep me */ compileSdk 33\n}\n", "com.example"
        )

        assert edit.text == (
            'android { /* keep me */\n    namespace "com.example"\n    compileSdk 33\n}\n'
        )

    def test_unterminated_comment_after_brace_is_left_alone(self):
        text = "android { /* unfinished\n    compileSdk 33\n}\n"

        edit = apply_namespace_patch(text, "com.example")

        assert edit.status == PatchStatus.BLOCK_NOT_FOUND
        assert edit.text == text

    def test_existing_indentation_is_reused(self):
        edit = apply_namespace_patch("android {\n\tcompileSdk 33\n}\n", "com.example")

        assert edit.text == 'android {\n\tnamespace "com.example"\n\tcompileSdk 33\n}\n'

    def test_nested_block_is_indented_one_level_deeper(self):
        edit = apply_namespace_patch(
            "subprojects {\n    android {\n    }\n}\n", "com.example"
        )

        assert edit.text == (
            'subprojects {\n    android {\n        namespace "com.example"\n    }\n}\n'
        )

    def test_commented_block_opening_is_skipped(self):
        edit = apply_namespace_patch("// android {\nandroid {\n}", "com.example")

        assert edit.text == '// android {\nandroid {\n    namespace "com.example"\n}'

    def test_custom_block_name(self):
        edit = apply_namespace_patch(
            "android {\n}\nlibrary {\n}\n", "com.example", block_name="library"
        )

        assert edit.text == 'android {\n}\nlibrary {\n    namespace "com.example"\n}\n'


class TestDeclarationStyles:
    """Tests for the rendering of the inserted declaration."""

    @pytest.mark.parametrize(
        "style, expected",
        [
            (DeclarationStyle.GROOVY, 'android {\n    namespace "com.example"\n}'),
            (
                DeclarationStyle.GROOVY_SINGLE_QUOTED,
                "android {\n    namespace 'com.example'\n}",
            ),
            (DeclarationStyle.KOTLIN, 'android {\n    namespace = "com.example"\n}'),
        ],
    )
    def test_styles(self, style, expected):
        edit = apply_namespace_patch("android {\n}", "com.example", style=style)

        assert edit.text == expected
