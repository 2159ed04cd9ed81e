import pytest

from libtdl.catalog import ModelCatalog, MONEY_MODEL
from libtdl.compiler import synthesize, compile_grammar
from libtdl.language import parse_template

ACME_MODEL = {
    'namespace': 'org.acme',
    'declarations': [
        {'name': 'Unit', 'kind': 'enum', 'values': ['days', 'weeks']},
        {'name': 'Duration', 'kind': 'concept', 'properties': [{'name': 'amount', 'type': 'Long'}, {'name': 'unit', 'type': 'Unit'}]},
        {'name': 'Greeting', 'kind': 'concept', 'properties': [{'name': 'name', 'type': 'String'}]},
        {'name': 'Flags', 'kind': 'concept', 'properties': [{'name': 'a', 'type': 'Boolean'}, {'name': 'b', 'type': 'Boolean'}]},
        {'name': 'Word', 'kind': 'enum', 'values': ['a', 'ab', 'b', 'ba']},
        {'name': 'Phrase', 'kind': 'concept', 'properties': [{'name': 'first', 'type': 'Word'}, {'name': 'second', 'type': 'Word'}]},
        {'name': 'Span', 'kind': 'concept', 'properties': [{'name': 'low', 'type': 'Integer'}, {'name': 'high', 'type': 'Integer'}]},
        {'name': 'Party', 'kind': 'participant', 'identifier': 'partyId',
         'properties': [{'name': 'partyId', 'type': 'String'}, {'name': 'name', 'type': 'String'}]},
        {'name': 'Item', 'kind': 'concept', 'properties': [{'name': 'label', 'type': 'String'}, {'name': 'quantity', 'type': 'Integer'}]},
        {'name': 'Order', 'kind': 'concept', 'properties': [{'name': 'items', 'type': 'Item', 'array': True},
                                                            {'name': 'note', 'type': 'String', 'optional': True},
                                                            {'name': 'tags', 'type': 'String', 'array': True, 'optional': True}]},
        {'name': 'Shipment', 'kind': 'concept', 'properties': [{'name': 'delay', 'type': 'Duration'},
                                                               {'name': 'forceMajeure', 'type': 'Boolean'},
                                                               {'name': 'unit', 'type': 'Unit'}]},
        {'name': 'LateDelivery', 'kind': 'contract', 'identifier': 'contractId', 'properties': [
            {'name': 'contractId', 'type': 'String'},
            {'name': 'buyer', 'type': 'Party', 'relationship': True},
            {'name': 'seller', 'type': 'Party'},
            {'name': 'penalty', 'type': 'Double'},
            {'name': 'forceMajeure', 'type': 'Boolean'},
            {'name': 'delay', 'type': 'Duration'},
            {'name': 'deliveryDate', 'type': 'DateTime'},
            {'name': 'price', 'type': 'org.accordproject.money.MonetaryAmount'},
            {'name': 'fee', 'type': 'Double', 'optional': True}]},
    ]
}


@pytest.fixture
def catalog():
    return ModelCatalog.from_dict(MONEY_MODEL, ACME_MODEL)


@pytest.fixture
def compile_template(catalog):
    def build(source, root_type, config=None):
        return compile_grammar(synthesize(parse_template(source), root_type, catalog, config), config)
    return build
