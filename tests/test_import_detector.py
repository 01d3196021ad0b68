"""
Import Detector 單元測試
涵蓋各種引號 / url() 寫法、修飾語、大小寫與路徑正規化。
"""
import pytest
from twcss_merge.import_detector import (
    IMPORT_FORMS,
    extract_import_targets,
    import_already_exists,
    normalize_import_path,
)

TARGET = "../vendor/mishka.css"


# ─── normalize_import_path ───────────────────────────────────────────────────

def test_normalize_trims_whitespace():
    assert normalize_import_path("  ../vendor/mishka.css \n") == TARGET


def test_normalize_backslashes():
    assert normalize_import_path("..\\vendor\\mishka.css") == TARGET


def test_normalize_duplicate_separators():
    assert normalize_import_path("..//vendor///mishka.css") == TARGET


# ─── import_already_exists：各種寫法 ─────────────────────────────────────────

class TestQuoteForms:
    @pytest.mark.parametrize("css", [
        '@import "../vendor/mishka.css";',
        "@import '../vendor/mishka.css';",
        '@import url("../vendor/mishka.css");',
        "@import url('../vendor/mishka.css');",
        "@import url(../vendor/mishka.css);",
    ])
    def test_every_form_is_detected(self, css):
        assert import_already_exists(css, TARGET)

    def test_forms_are_kept_as_data(self):
        # 五種寫法集中在同一份清單
        assert len(IMPORT_FORMS) == 5

    def test_source_modifier_is_ignored(self):
        css = '@import "../vendor/mishka.css" source(none);'
        assert import_already_exists(css, TARGET)

    def test_layer_modifier_on_url_form(self):
        css = "@import url('../vendor/mishka.css') layer(components);"
        assert import_already_exists(css, TARGET)

    def test_keyword_is_case_insensitive(self):
        assert import_already_exists('@IMPORT "../vendor/mishka.css";', TARGET)
        assert import_already_exists('@Import URL("../vendor/mishka.css");', TARGET)

    def test_multiple_spaces(self):
        assert import_already_exists('@import     "../vendor/mishka.css";', TARGET)

    def test_tab_separator(self):
        assert import_already_exists('@import\t"../vendor/mishka.css";', TARGET)

    def test_spaces_inside_url(self):
        assert import_already_exists('@import url( "../vendor/mishka.css" );', TARGET)

    def test_modifier_on_continuation_line(self):
        css = '@import "../vendor/mishka.css"\n  layer(components);\n'
        assert import_already_exists(css, TARGET)

    def test_url_form_with_multiline_media_query(self):
        css = "@import url(../vendor/mishka.css)\n  screen and\n  (min-width: 40rem);"
        assert import_already_exists(css, TARGET)


class TestNoMatch:
    def test_other_import(self):
        assert not import_already_exists('@import "other.css";', TARGET)

    def test_empty_content(self):
        assert not import_already_exists("", TARGET)

    def test_unterminated_quote_does_not_raise(self):
        assert not import_already_exists('@import "../vendor/mishka.css', TARGET)

    def test_missing_semicolon(self):
        assert not import_already_exists('@import "../vendor/mishka.css"', TARGET)

    def test_missing_semicolon_before_rule(self):
        css = '@import "../vendor/mishka.css"\nbody { color: red; }\n'
        assert not import_already_exists(css, TARGET)

    def test_prefix_of_longer_path(self):
        assert not import_already_exists('@import "../vendor/mishka.css.map";', TARGET)

    def test_mismatched_quotes(self):
        assert not import_already_exists("@import \"../vendor/mishka.css';", TARGET)

    def test_empty_target(self):
        assert not import_already_exists('@import "a.css";', "   ")


class TestNormalizedMatch:
    def test_backslash_path_in_document(self):
        css = '@import "..\\vendor\\mishka.css";'
        assert import_already_exists(css, TARGET)

    def test_double_slash_in_document(self):
        assert import_already_exists('@import "../vendor//mishka.css";', TARGET)

    def test_double_slash_in_target(self):
        assert import_already_exists('@import "../vendor/mishka.css";', "..//vendor/mishka.css")

    def test_very_long_path(self):
        long_path = "../" + "very/long/" * 20 + "path.css"
        assert import_already_exists(f'@import "{long_path}";', long_path)

    def test_special_characters_in_path(self):
        path = "../vendor/mishka-chelekom_v1.0.css"
        assert import_already_exists(f"@import url({path});", path)


# ─── extract_import_targets ──────────────────────────────────────────────────

def test_extract_targets_in_document_order():
    css = (
        '@import url(a.css);\n'
        '@import "b.css" layer(base);\n'
        "/* comment */\n"
        "@import 'c.css';\n"
    )
    assert extract_import_targets(css) == ["a.css", "b.css", "c.css"]


def test_extract_targets_skips_malformed():
    css = '@import "ok.css";\n@import "broken\n'
    assert extract_import_targets(css) == ["ok.css"]


def test_extract_targets_several_on_one_line():
    assert extract_import_targets('@import "a.css"; @import "b.css";') == ["a.css", "b.css"]


def test_extract_targets_unterminated_does_not_swallow_next_import():
    assert extract_import_targets('@import "a.css"\n@import "b.css";\n') == ["b.css"]
