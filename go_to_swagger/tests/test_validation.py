"""
Unit tests for the validation constraint model.
"""

import unittest

from go_to_swagger.pipeline.analyzer.validation import (
    ValidationMap,
    parse_validate_tag,
    parse_validation_expression,
)


class TestValidationMap(unittest.TestCase):
    def test_required(self):
        self.assertTrue(parse_validation_expression("required,min=1").is_required())
        self.assertFalse(parse_validation_expression("min=1").is_required())

    def test_min_takes_precedence_over_gte(self):
        validation = parse_validation_expression("gte=5,min=2")
        self.assertEqual(validation.minimum(), 2.0)

    def test_gte_used_without_min(self):
        self.assertEqual(parse_validation_expression("gte=5").minimum(), 5.0)

    def test_max_takes_precedence_over_lte(self):
        validation = parse_validation_expression("max=10,lte=20")
        self.assertEqual(validation.maximum(), 10.0)
        self.assertEqual(parse_validation_expression("lte=20").maximum(), 20.0)

    def test_unconstrained_is_none(self):
        validation = ValidationMap()
        self.assertIsNone(validation.minimum())
        self.assertIsNone(validation.maximum())
        self.assertIsNone(validation.length())
        self.assertIsNone(validation.greater_than())
        self.assertIsNone(validation.less_than())
        self.assertEqual(validation.equals(), ("", False))

    def test_zero_and_negative_bounds_are_constraints(self):
        validation = parse_validation_expression("min=0,max=-1,gt=-10")
        self.assertEqual(validation.minimum(), 0.0)
        self.assertEqual(validation.maximum(), -1.0)
        self.assertEqual(validation.greater_than(), -10.0)

    def test_equals_keeps_raw_operand(self):
        self.assertEqual(parse_validation_expression("eq=abc").equals(), ("abc", True))

    def test_length(self):
        self.assertEqual(parse_validation_expression("len=4").length(), 4.0)

    def test_malformed_operand_is_unconstrained(self):
        with self.assertLogs("go_to_swagger.pipeline.analyzer.validation", level="WARNING"):
            self.assertIsNone(parse_validation_expression("min=abc").minimum())

    def test_malformed_min_falls_back_to_gte(self):
        with self.assertLogs("go_to_swagger.pipeline.analyzer.validation", level="WARNING"):
            self.assertEqual(parse_validation_expression("min=x,gte=3").minimum(), 3.0)

    def test_infinite_operand_is_unconstrained(self):
        with self.assertLogs("go_to_swagger.pipeline.analyzer.validation", level="WARNING"):
            self.assertIsNone(parse_validation_expression("max=inf").maximum())
        with self.assertLogs("go_to_swagger.pipeline.analyzer.validation", level="WARNING"):
            self.assertIsNone(parse_validation_expression("gt=-Infinity").greater_than())

    def test_nan_operand_is_unconstrained(self):
        with self.assertLogs("go_to_swagger.pipeline.analyzer.validation", level="WARNING"):
            self.assertIsNone(parse_validation_expression("min=nan").minimum())

    def test_non_finite_min_falls_back_to_gte(self):
        with self.assertLogs("go_to_swagger.pipeline.analyzer.validation", level="WARNING"):
            self.assertEqual(parse_validation_expression("min=inf,gte=2").minimum(), 2.0)


class TestValidateTag(unittest.TestCase):
    def test_no_validate_key(self):
        container, element = parse_validate_tag('json:"name"')
        self.assertEqual(container, {})
        self.assertEqual(element, {})

    def test_plain_expression(self):
        container, element = parse_validate_tag('json:"age" validate:"required,min=1,max=10"')
        self.assertEqual(container, {"required": "", "min": "1", "max": "10"})
        self.assertEqual(element, {})

    def test_dive_splits_container_and_element(self):
        container, element = parse_validate_tag('validate:"required,max=5,dive,min=2"')
        self.assertEqual(container, {"required": "", "max": "5"})
        self.assertEqual(element, {"min": "2"})
        self.assertTrue(container.is_required())
        self.assertFalse(element.is_required())

    def test_returns_validation_maps(self):
        container, element = parse_validate_tag('validate:"dive,required"')
        self.assertIsInstance(container, ValidationMap)
        self.assertTrue(element.is_required())


if __name__ == "__main__":
    unittest.main()
