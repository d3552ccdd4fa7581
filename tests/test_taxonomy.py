from budget_dashboard.taxonomy import DEFAULT_TAXONOMY, CategoryTaxonomy


def test_default_taxonomy_categories():
    assert DEFAULT_TAXONOMY.categories == [
        'Fixed Expenses',
        'Variable Expenses',
        'Periodic and Occasional Expenses',
    ]
    assert len(DEFAULT_TAXONOMY.subcategories('Variable Expenses')) == 8
    assert DEFAULT_TAXONOMY.subcategories('Nope') == ()


def test_pair_membership():
    assert DEFAULT_TAXONOMY.contains('Fixed Expenses', 'Transportation')
    assert DEFAULT_TAXONOMY.contains('Variable Expenses', 'Transportation')
    assert not DEFAULT_TAXONOMY.contains('Periodic and Occasional Expenses', 'Transportation')
    assert not DEFAULT_TAXONOMY.contains(None, 'Food')


def test_infer_category():
    assert DEFAULT_TAXONOMY.infer_category('Food') == 'Variable Expenses'
    assert DEFAULT_TAXONOMY.infer_category('Transportation') is None
    assert DEFAULT_TAXONOMY.infer_category('Yachts') is None
    assert DEFAULT_TAXONOMY.infer_category('') is None


def test_custom_taxonomy_preserves_order():
    taxonomy = CategoryTaxonomy({'B': ['y', 'x'], 'A': ['z']})
    assert list(taxonomy) == ['B', 'A']
    assert taxonomy.pairs() == [('B', 'y'), ('B', 'x'), ('A', 'z')]
    assert 'A' in taxonomy
