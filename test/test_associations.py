import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from schemoid.associations import AssociationAnnotator
from schemoid.config import URL_TEMPLATES
from schemoid.references import ReferenceResolver
from schemoid.uritemplates import UriTemplateRegistry


class TestAssociationAnnotator(unittest.TestCase):

    def setUp(self):
        resolver = ReferenceResolver(UriTemplateRegistry(URL_TEMPLATES))
        self.annotator = AssociationAnnotator(resolver, 'Card')

    def test_no_annotations(self):
        """ a plain field yields a bare line break """
        self.assertEqual(self.annotator.get_field_associations({'type': 'string'}), '\n')
        self.assertEqual(self.annotator.get_field_associations({}), '\n')

    def test_description(self):
        self.assertEqual(self.annotator.get_field_associations({'description': 'Formatted Name', 'type': 'string'}),
                         '\n  # field description: Formatted Name\n')

    def test_properties_and_items(self):
        """ nested property names and item types are listed """
        field = {'type': 'object', 'properties': {'type': {}, 'value': {}}}
        self.assertEqual(self.annotator.annotate(field), ['properties: type, value'])
        field = {'type': 'array', 'items': {'type': 'string'}}
        self.assertEqual(self.annotator.annotate(field), ['items: string'])
        field = {'type': 'array', 'items': {'type': ['string', 'null']}}
        self.assertEqual(self.annotator.annotate(field), ['items: string, null'])

    def test_resolved_reference(self):
        """ resolved references suggest the embedding of the referenced class """
        field = {'ref': 'http://json-schema.org/address'}
        self.assertEqual(self.annotator.annotate(field), [
            "reference: http://json-schema.org/address\n"
            "  # @todo: specify 'embedded_in :Card' within class Address"
        ])

    def test_unresolved_reference(self):
        """ references without namespace are listed without suggestion """
        field = {'ref': 'http://json-schema.org'}
        self.assertEqual(self.annotator.annotate(field), ['reference: http://json-schema.org'])

    def test_annotation_order(self):
        """ annotations are joined in a single comment """
        field = {'description': 'Home', 'ref': 'http://json-schema.org/geo'}
        self.assertEqual(self.annotator.get_field_associations(field),
                         "\n  # field description: Home, reference: http://json-schema.org/geo\n"
                         "  # @todo: specify 'embedded_in :Card' within class Geo\n")

    def test_appends_to_results(self):
        results = ['existing']
        self.assertIs(self.annotator.add_associations({'description': 'x'}, results), results)
        self.assertEqual(results, ['existing', 'description: x'])
