import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from schemoid.dependency_resolver import DependencyTracker


class TestDependencyTracker(unittest.TestCase):

    def test_inverts_dependencies(self):
        """ each dependency owns the fields depending on it """
        tracker = DependencyTracker()
        tracker.add('post_office_box', ['street_address'])
        tracker.add('extended_address', ['street_address', 'locality'])
        self.assertEqual(dict(tracker.all()), {
            'street_address': ['post_office_box', 'extended_address'],
            'locality': ['extended_address'],
        })

    def test_view_is_read_only(self):
        """ the returned mapping cannot be changed """
        tracker = DependencyTracker()
        tracker.add('a', ['b'])
        with self.assertRaises(TypeError):
            tracker.all()['c'] = ['d']

    def test_empty(self):
        self.assertEqual(dict(DependencyTracker().all()), {})

    def test_schema_dependencies(self):
        """ only property dependencies are registered """
        tracker = DependencyTracker()
        tracker.add_schema_dependencies({
            'dependencies': {
                'post_office_box': ['street_address'],
                'extended_address': ['street_address'],
                'credit_card': {'properties': {'billing_address': {'type': 'string'}}},
                'broken': ['a', 1],
            }
        })
        self.assertEqual(dict(tracker.all()), {'street_address': ['post_office_box', 'extended_address']})

    def test_schema_without_dependencies(self):
        tracker = DependencyTracker()
        tracker.add_schema_dependencies({'type': 'object'})
        tracker.add_schema_dependencies({'dependencies': ['a']})
        self.assertEqual(dict(tracker.all()), {})
