import unittest

from giraffics.sceneparser import (AmbientLightDef, DirectionLightDef, LexError, PointLightDef,
                                   SceneError, SceneSyntaxError, SemanticError, SphereDef,
                                   WindowDef, format_definitions, parse)

EXAMPLE = """\
window {
title = "Demo"
width = 640
height = 480
}
light {
type = ambient
intensity = 0.2
}
light {
type = point
intensity = 0.6
position = (2, 1, 0)
}
sphere {
color = (255, 0, 0)
center = (0, -1, 3)
radius = 1
}
"""


def block(kind, *lines):
    return "%s {\n%s\n}\n" % (kind, "\n".join(lines))


class TestParse(unittest.TestCase):

    def test_example_scene(self):
        self.assertEqual(parse(EXAMPLE), [
            WindowDef(title="Demo", width=640, height=480),
            AmbientLightDef(intensity=0.2),
            PointLightDef(intensity=0.6, position=(2, 1, 0)),
            SphereDef(color=(255, 0, 0), center=(0, -1, 3), radius=1),
        ])

    def test_directional_light(self):
        defs = parse(block("light", "type = directional", "intensity = 0.2",
                           "direction = (1, 4, 4)"))
        self.assertEqual(defs, [DirectionLightDef(intensity=0.2, direction=(1, 4, 4))])

    def test_bare_identifier_is_a_string(self):
        self.assertEqual(parse(block("window", "title = Demo")), [WindowDef(title="Demo")])

    def test_window_fields_are_optional(self):
        self.assertEqual(parse(block("window", "width = 10")), [WindowDef(width=10)])

    def test_comments_and_blank_lines(self):
        text = "# header\n\n" + block("light", "# inside", "type = ambient", "",
                                     "intensity = 1") + "\n# trailing comment"
        self.assertEqual(parse(text), [AmbientLightDef(intensity=1)])

    def test_file_order_is_kept(self):
        text = (block("sphere", "color = (1, 1, 1)", "center = (0, 0, 1)", "radius = 1")
                + block("light", "type = ambient", "intensity = 1")
                + block("sphere", "color = (2, 2, 2)", "center = (0, 0, 2)", "radius = 2"))
        defs = parse(text)
        self.assertEqual([type(d) for d in defs], [SphereDef, AmbientLightDef, SphereDef])
        self.assertEqual(defs[2].radius, 2)

    def test_later_duplicate_key_wins(self):
        defs = parse(block("window", "width = 10", "width = 20"))
        self.assertEqual(defs, [WindowDef(width=20)])

    def test_crlf_line_endings(self):
        self.assertEqual(parse(EXAMPLE.replace("\n", "\r\n")), parse(EXAMPLE))

    def test_deterministic(self):
        self.assertEqual(parse(EXAMPLE), parse(EXAMPLE))
        bad = block("sphere", "color = (1, 1, 1)", "center = (0, 0, 1)")
        messages = []
        for _ in range(2):
            with self.assertRaises(SemanticError) as cm:
                parse(bad)
            messages.append(str(cm.exception))
        self.assertEqual(messages[0], messages[1])


class TestSyntaxErrors(unittest.TestCase):

    def assertSyntaxError(self, text, fragment=None):
        with self.assertRaises(SceneSyntaxError) as cm:
            parse(text)
        if fragment is not None:
            self.assertIn(fragment, str(cm.exception))

    def test_empty_input(self):
        self.assertSyntaxError("")
        self.assertSyntaxError("\n# only a comment\n")

    def test_missing_brace(self):
        self.assertSyntaxError("sphere\nradius = 1\n}\n", "curly brace")

    def test_block_must_start_on_new_line(self):
        self.assertSyntaxError("window { width = 1\n}\n", "newline")

    def test_missing_equals(self):
        self.assertSyntaxError(block("window", "width 10"), "Expected =")

    def test_assignment_needs_newline(self):
        self.assertSyntaxError("window {\nwidth = 10 }\n", "terminated by newlines")

    def test_short_tuple(self):
        self.assertSyntaxError(block("light", "type = point", "position = (1, 2)"), "comma")

    def test_tuple_of_strings(self):
        self.assertSyntaxError(block("sphere", "center = (a, 1, 2)"), "Tuples can only contain numbers")

    def test_empty_block(self):
        self.assertSyntaxError("window {\n}\n")

    def test_unexpected_eof(self):
        self.assertSyntaxError("window {\nwidth = 10\n", "EOF")
        self.assertSyntaxError("window {\nwidth =", "EOF")

    def test_invalid_value(self):
        self.assertSyntaxError(block("window", "width = {"), "Invalid value")

    def test_definition_must_start_with_identifier(self):
        self.assertSyntaxError("42 {\nwidth = 1\n}\n", "definition type")


class TestLexErrors(unittest.TestCase):

    def test_error_token_in_value(self):
        with self.assertRaises(LexError) as cm:
            parse("window {\nwidth = 10 @\n}\n")
        self.assertIn("'@'", str(cm.exception))
        self.assertIn("line 2", str(cm.exception))

    def test_error_token_after_last_definition(self):
        with self.assertRaises(LexError):
            parse(block("window", "width = 10") + "$\n")

    def test_error_token_where_assignment_expected(self):
        with self.assertRaises(LexError):
            parse("window {\nwidth = 10\n%\n}\n")

    def test_is_a_scene_error(self):
        with self.assertRaises(SceneError):
            parse("!")


class TestSemanticErrors(unittest.TestCase):

    def assertSemanticError(self, text, fragment):
        with self.assertRaises(SemanticError) as cm:
            parse(text)
        self.assertIn(fragment, str(cm.exception))

    def test_unknown_kind(self):
        self.assertSemanticError(block("cube", "size = 1"), "Unsupported definition type: cube")

    def test_unknown_key(self):
        self.assertSemanticError(block("window", "depth = 1"), "'depth'")
        self.assertSemanticError(
            block("sphere", "color = (1, 1, 1)", "center = (0, 0, 1)", "radius = 1", "shine = 2"),
            "'shine'")

    def test_wrong_value_shape(self):
        self.assertSemanticError(
            block("sphere", "color = (1, 1, 1)", "center = (0, 0, 1)", "radius = (1, 2, 3)"),
            "Expected number for property radius")
        self.assertSemanticError(
            block("sphere", "color = red", "center = (0, 0, 1)", "radius = 1"),
            "Expected tuple for property color")
        self.assertSemanticError(block("window", "title = 5"), "Expected string for property title")
        self.assertSemanticError(block("light", "type = (1, 2, 3)", "intensity = 1"),
                                 "Expected string for property type")

    def test_missing_sphere_key(self):
        self.assertSemanticError(block("sphere", "color = (1, 1, 1)", "center = (0, 0, 1)"),
                                 "radius")
        self.assertSemanticError(block("sphere", "radius = 1"), "color, center are missing")

    def test_light_needs_type_and_intensity(self):
        self.assertSemanticError(block("light", "intensity = 1"), "require a type and an intensity")
        self.assertSemanticError(block("light", "type = ambient"), "require a type and an intensity")

    def test_ambient_rejects_position_and_direction(self):
        self.assertSemanticError(
            block("light", "type = ambient", "intensity = 1", "position = (1, 2, 3)"),
            "ambient")
        self.assertSemanticError(
            block("light", "type = ambient", "intensity = 1", "direction = (1, 2, 3)"),
            "ambient")

    def test_point_light_rules(self):
        self.assertSemanticError(block("light", "type = point", "intensity = 1"),
                                 "point lights require a position")
        self.assertSemanticError(
            block("light", "type = point", "intensity = 1", "position = (1, 2, 3)",
                  "direction = (1, 2, 3)"),
            "point lights do not support the direction property")

    def test_directional_light_rules(self):
        self.assertSemanticError(block("light", "type = directional", "intensity = 1"),
                                 "directional lights require a direction")
        self.assertSemanticError(
            block("light", "type = directional", "intensity = 1", "direction = (1, 2, 3)",
                  "position = (1, 2, 3)"),
            "directional lights do not support the position property")

    def test_unknown_light_type(self):
        self.assertSemanticError(block("light", "type = spot", "intensity = 1"),
                                 "Unsupported light type: spot")

    def test_value_ranges(self):
        self.assertSemanticError(
            block("sphere", "color = (1, 1, 1)", "center = (0, 0, 1)", "radius = 0"),
            "radius must be positive")
        self.assertSemanticError(block("light", "type = ambient", "intensity = -1"),
                                 "intensity must not be negative")
        self.assertSemanticError(block("window", "width = 0"), "width must be at least 1")
        self.assertSemanticError(block("window", "height = -5"), "height must be at least 1")

    def test_first_error_wins(self):
        text = block("sphere", "radius = 1") + "window {\nwidth 1\n}\n"
        self.assertSemanticError(text, "Sphere definitions require")


class TestFormat(unittest.TestCase):

    def test_round_trip(self):
        defs = [
            WindowDef(title="Round trip", width=320, height=240),
            WindowDef(height=17),
            AmbientLightDef(intensity=0.1),
            PointLightDef(intensity=0.35, position=(-2.5, 1e-7, 1234.5)),
            DirectionLightDef(intensity=1, direction=(0.1, -0.2, 0.3)),
            SphereDef(color=(255, 12.5, 0), center=(-0.0, -5001, 0), radius=5000),
        ]
        self.assertEqual(parse(format_definitions(defs)), defs)

    def test_round_trip_example(self):
        self.assertEqual(parse(format_definitions(parse(EXAMPLE))), parse(EXAMPLE))

    def test_unwritable_values(self):
        with self.assertRaises(ValueError):
            format_definitions([WindowDef(title='say "hi"')])
        with self.assertRaises(ValueError):
            format_definitions([AmbientLightDef(intensity=float("inf"))])
        with self.assertRaises(ValueError):
            format_definitions([WindowDef()])


if __name__ == '__main__':
    unittest.main()
