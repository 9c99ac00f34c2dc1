import pytest

from welfare.exceptions import ConfigurationError
from welfare.utils.category_helpers import (
    CENTENARIAN_CATEGORY,
    NONAGENARIAN_CATEGORY,
    OCTOGENARIAN_CATEGORY,
    REGULAR_CATEGORY,
    SPECIAL_ASSISTANCE_CATEGORY,
    CategoryChange,
    CategoryReconciler,
    determine_category_by_age,
    get_updated_category_if_changed,
    initial_category_name,
    parse_age,
)


LOOKUP = {
    REGULAR_CATEGORY: 'regular-id',
    SPECIAL_ASSISTANCE_CATEGORY: 'special-id',
    OCTOGENARIAN_CATEGORY: 'octo-id',
    NONAGENARIAN_CATEGORY: 'nona-id',
    CENTENARIAN_CATEGORY: 'cente-id',
}


@pytest.mark.parametrize('age, expected', [
    (60, REGULAR_CATEGORY),
    (79, REGULAR_CATEGORY),
    (80, OCTOGENARIAN_CATEGORY),
    (89, OCTOGENARIAN_CATEGORY),
    (90, NONAGENARIAN_CATEGORY),
    (99, NONAGENARIAN_CATEGORY),
    (100, CENTENARIAN_CATEGORY),
    (104, CENTENARIAN_CATEGORY),
])
def test_determine_category_by_age(age, expected):
    assert determine_category_by_age(age) == expected


def test_parse_age_handles_stored_text():
    assert parse_age('81') == 81
    assert parse_age(' 7 ') == 7
    assert parse_age('') == 0
    assert parse_age(None) == 0
    assert parse_age('n/a') == 0


class TestAgeTierChange:

    @pytest.mark.parametrize('old_age, new_age, expected', [
        (79, 80, 'octo-id'),
        ('79', '81', 'octo-id'),
        (89, 90, 'nona-id'),
        (99, 100, 'cente-id'),
        (81, 85, None),
        (82, 85, None),
        (100, 104, None),
    ])
    def test_tier_boundaries(self, old_age, new_age, expected):
        assert get_updated_category_if_changed(old_age, new_age, LOOKUP) == expected

    def test_same_input_same_answer(self):
        first = get_updated_category_if_changed(89, 90, LOOKUP)
        second = get_updated_category_if_changed(89, 90, LOOKUP)
        assert first == second == 'nona-id'
        assert LOOKUP[NONAGENARIAN_CATEGORY] == 'nona-id'

    def test_missing_lookup_row(self):
        with pytest.raises(ConfigurationError):
            get_updated_category_if_changed(89, 90, {REGULAR_CATEGORY: 'regular-id'})


class TestCategoryReconciler:

    def test_default_order_from_settings(self):
        assert CategoryReconciler().rule_order == ['pwd', 'age_tier']

    def test_age_tier_rule(self):
        change = CategoryChange('79', '81')
        assert CategoryReconciler().resolve(change, LOOKUP) == 'octo-id'

    def test_nothing_changed(self):
        assert CategoryReconciler().resolve(CategoryChange(82, 85), LOOKUP) is None

    def test_becoming_pwd(self):
        change = CategoryChange(70, 70, old_pwd=False, new_pwd=True)
        assert CategoryReconciler().resolve(change, LOOKUP) == 'special-id'

    def test_leaving_pwd(self):
        change = CategoryChange(70, 70, old_pwd=True, new_pwd=False)
        assert CategoryReconciler().resolve(change, LOOKUP) == 'regular-id'

    @pytest.mark.parametrize('age, expected', [(85, 'octo-id'), (93, 'nona-id'), (101, 'cente-id')])
    def test_leaving_pwd_returns_to_age_tier(self, age, expected):
        change = CategoryChange(age, age, old_pwd=True, new_pwd=False)
        assert CategoryReconciler().resolve(change, LOOKUP) == expected
        assert LOOKUP[initial_category_name(age, pwd=False)] == expected

    def test_pwd_wins_over_age_tier(self):
        change = CategoryChange(79, 81, old_pwd=False, new_pwd=True)
        assert CategoryReconciler().resolve(change, LOOKUP) == 'special-id'

    def test_pwd_senior_keeps_special_category_when_aging(self):
        change = CategoryChange(89, 90, old_pwd=True, new_pwd=True)
        assert CategoryReconciler().resolve_category_name(change) is None

    def test_leaving_pwd_while_aging_agrees_in_either_order(self):
        change = CategoryChange(79, 81, old_pwd=True, new_pwd=False)
        assert CategoryReconciler(['age_tier', 'pwd']).resolve(change, LOOKUP) == 'octo-id'
        assert CategoryReconciler(['pwd', 'age_tier']).resolve(change, LOOKUP) == 'octo-id'

    def test_order_from_settings(self, settings):
        settings.WELFARE = {'CATEGORY_RULE_ORDER': ['age_tier']}
        change = CategoryChange(70, 70, old_pwd=False, new_pwd=True)
        assert CategoryReconciler().resolve(change, LOOKUP) is None

    def test_unknown_rule(self):
        with pytest.raises(ConfigurationError):
            CategoryReconciler(['pwd', 'low_income'])

    def test_duplicate_rule(self):
        with pytest.raises(ConfigurationError):
            CategoryReconciler(['pwd', 'pwd'])

    def test_missing_category_row(self):
        with pytest.raises(ConfigurationError):
            CategoryReconciler().resolve(CategoryChange(79, 81), {})


def test_initial_category_name():
    assert initial_category_name('85', pwd=True) == SPECIAL_ASSISTANCE_CATEGORY
    assert initial_category_name('85', pwd=False) == OCTOGENARIAN_CATEGORY
    assert initial_category_name('65', pwd=False) == REGULAR_CATEGORY
