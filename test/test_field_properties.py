import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from schemoid.errors import SchemaShapeError
from schemoid.field_properties import add_required_fields, get_field_property, update_field_property


class TestFieldProperties(unittest.TestCase):

    def test_collects_marked_fields(self):
        """ fields are collected in discovery order, depth first """
        source = {
            'properties': {
                'a': {'required': True, 'properties': {'c': {'required': True}}},
                'b': {'required': True},
                'd': {'type': 'string'},
            }
        }
        self.assertEqual(get_field_property(source, 'required'), ['a', 'c', 'b'])

    def test_only_true_counts(self):
        """ truthy values other than true are not markers """
        source = {'properties': {'a': {'required': 'yes'}, 'b': {'required': 1}, 'c': {'required': False}}}
        self.assertEqual(get_field_property(source, 'required'), [])

    def test_equal_names_collapse(self):
        """ fields are identified by name across branches """
        source = {
            'properties': {
                'name': {'required': True},
                'owner': {'properties': {'name': {'required': True}, 'email': {'required': True}}},
            }
        }
        self.assertEqual(get_field_property(source, 'required'), ['name', 'email'])

    def test_other_properties(self):
        source = {'properties': {'a': {'read_only': True}, 'b': {'required': True}}}
        self.assertEqual(get_field_property(source, 'read_only'), ['a'])

    def test_update_appends_new_names(self):
        """ existing entries keep their position """
        source = {'required': ['family_name', 'given_name']}
        update_field_property(source, 'required', ['nickname', 'given_name'])
        self.assertEqual(source['required'], ['family_name', 'given_name', 'nickname'])

    def test_update_dedupes(self):
        source = {'required': ['a', 'a']}
        update_field_property(source, 'required', ['b'])
        self.assertEqual(source['required'], ['a', 'b'])

    def test_update_creates_array(self):
        source = {}
        update_field_property(source, 'required', ['a'])
        self.assertEqual(source, {'required': ['a']})

    def test_update_rejects_non_array(self):
        """ the merge target must be an array """
        with self.assertRaises(SchemaShapeError) as context:
            update_field_property({'required': True}, 'required', ['a'])
        self.assertEqual(context.exception.path, '$.required')

    def test_add_required_fields(self):
        source = {'required': ['a'], 'properties': {'b': {'required': True}}}
        self.assertEqual(add_required_fields(source)['required'], ['a', 'b'])

    def test_nothing_discovered(self):
        """ a tree without markers is returned as it is """
        source = {'required': ['x', 'x'], 'properties': {'x': {'type': 'string'}}}
        result = add_required_fields(source)
        self.assertIs(result, source)
        self.assertEqual(result['required'], ['x', 'x'])
        source = {'properties': {}}
        self.assertNotIn('required', add_required_fields(source))

    def test_non_array_required_without_markers(self):
        """ the shape of required only matters when there is something to merge """
        source = {'required': True, 'properties': {'x': {'type': 'string'}}}
        self.assertIs(add_required_fields(source), source)
