import os
import sys
import unittest

import pytest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from schemoid.common import (MAX_RECURSION_DEPTH, check_recursion, is_array_of_strings,
                             normalize_array_value, pascal, sanitize_name, underscore, upcase_first)
from schemoid.errors import SchemaCycleError, SchemaDepthError


class TestSanitizeName(unittest.TestCase):

    def test_strips_symbols_preserving_case_and_format(self):
        """ Characters outside [A-Za-z0-9_-] are removed, everything else is kept """
        fixtures = [
            ('&foo^/?><-+=0^bar^1', 'foo-0bar1'),
            ('&foo^/?><_+=0^bar^1', 'foo_0bar1'),
            ('&foo^/?><-_+=0^bar^1', 'foo-_0bar1'),
            ('&1^0?<foo+=0^bar^1', '10foo0bar1'),
            ('&1^?<foo+=0^bar^1', '1foo0bar1'),
            ('&FOO^?<BAR+=^^', 'FOOBAR'),
            ('&BAR^?<FOO+=BAR^^', 'BARFOOBAR'),
            ('&1^?<0+=^^', '10'),
            ('$schema', 'schema'),
            ('$ref', 'ref'),
        ]
        for value, result in fixtures:
            self.assertEqual(sanitize_name(value), result)

    def test_camel_case_without_conversion(self):
        """ camelCase survives when snake_case conversion is off """
        self.assertEqual(sanitize_name('fooBar'), 'fooBar')
        self.assertEqual(sanitize_name('MoreFooBar'), 'MoreFooBar')

    def test_camel_case_with_conversion(self):
        """ camelCase and PascalCase become snake_case """
        self.assertEqual(sanitize_name('fooBar', True), 'foo_bar')
        self.assertEqual(sanitize_name('MoreFooBar', True), 'more_foo_bar')

    def test_snake_case_is_stable(self):
        """ snake_case input is returned as is, with or without conversion """
        for value in ['foo_bar', 'more_foo_bar']:
            self.assertEqual(sanitize_name(value), value)
            self.assertEqual(sanitize_name(value, True), value)

    def test_hyphens_are_preserved(self):
        """ hyphens are neither removed nor merged into underscores """
        self.assertEqual(sanitize_name('foo-bar', True), 'foo-bar')
        self.assertEqual(sanitize_name('date-time', True), 'date-time')

    def test_non_string_input_raises(self):
        """ only strings can be sanitized """
        for value in [0, None, ['foo'], {'foo': 'bar'}]:
            with self.assertRaises(TypeError):
                sanitize_name(value)


@pytest.mark.parametrize("word, result", [
    ('fooBar', 'foo_bar'),
    ('FooBar', 'foo_bar'),
    ('HTMLParser', 'html_parser'),
    ('FOOBAR', 'foobar'),
    ('userID2', 'user_id2'),
    ('2ndPlace', '2nd_place'),
    ('foo_Bar', 'foo_bar'),
    ('', ''),
])
def test_underscore(word, result):
    """ camel to snake inflection """
    assert underscore(word) == result


def test_is_array_of_strings():
    """ only non-empty lists of strings qualify, empty strings included """
    assert is_array_of_strings(['fooBar', 'FooBar', 'foo_bar', 'foo-bar', 'foobar'])
    assert is_array_of_strings(['fooBar', ''])
    assert is_array_of_strings(['', ''])
    for value in [None, '', [], [0, 1, 2, 3], ['foo', 1], ['foo', None], [{'foo': 'bar'}]]:
        assert not is_array_of_strings(value)


def test_normalize_array_value():
    """ every term becomes a snake_case token """
    values = ['fooBar', 'FooBar', 'foo_bar', 'foobar', '$Foo']
    assert normalize_array_value(values) == ['foo_bar', 'foo_bar', 'foo_bar', 'foobar', 'foo']


def test_upcase_first():
    """ only the first character changes """
    assert upcase_first('minimal') == 'Minimal'
    assert upcase_first('fooBar') == 'FooBar'
    assert upcase_first('') == ''


@pytest.mark.parametrize("word, result", [
    ('postal_address', 'PostalAddress'),
    ('organization', 'Organization'),
    ('post-box', 'PostBox'),
    ('fooBar', 'FooBar'),
    ('_id', 'Id'),
    ('', ''),
])
def test_pascal(word, result):
    """ class names from snake_case tokens """
    assert pascal(word) == result


def test_check_recursion_detects_cycles():
    """ a node already on the path is a cycle """
    node = {}
    stack = [(node, '$'), ({}, '$.a')]
    with pytest.raises(SchemaCycleError) as error:
        check_recursion(node, '$.a.b', stack)
    assert error.value.cycle_path == ['$', '$.a', '$.a.b']
    assert error.value.path == '$.a.b'


def test_check_recursion_limits_depth():
    """ the recursion path cannot exceed the maximum depth """
    stack = [({}, f'$.{i}') for i in range(MAX_RECURSION_DEPTH)]
    with pytest.raises(SchemaDepthError):
        check_recursion({}, '$.deep', stack)
    check_recursion({}, '$.ok', stack[:-1])
