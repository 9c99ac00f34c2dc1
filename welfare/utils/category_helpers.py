"""
Senior Category Helpers
=======================

Decides which benefit category a senior's applications belong to.

Two independent rules can move a senior to a new category:

    pwd       PWD flag flipped      → Special assistance cases / back to the age tier
    age_tier  age crossed a tier    → Regular / Octogenarian / Nonagenarian / Centenarian

Both write the same field, so a CategoryReconciler evaluates them in a fixed
order (settings.WELFARE['CATEGORY_RULE_ORDER']) and the first rule that fires
wins. Nothing in this module touches the database: category ids come from a
``{name: id}`` lookup built by the caller.
"""

import logging

from welfare.conf import welfare_settings
from welfare.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# CATEGORY NAMES
# =============================================================================

REGULAR_CATEGORY = 'Regular senior citizens'
SPECIAL_ASSISTANCE_CATEGORY = 'Special assistance cases'
OCTOGENARIAN_CATEGORY = 'Octogenarian (80-89)'
NONAGENARIAN_CATEGORY = 'Nonagenarian (90-99)'
CENTENARIAN_CATEGORY = 'Centenarian (100+)'

# Seed order for the SeniorCategory lookup table
SENIOR_CATEGORIES = [
    REGULAR_CATEGORY,
    SPECIAL_ASSISTANCE_CATEGORY,
    OCTOGENARIAN_CATEGORY,
    NONAGENARIAN_CATEGORY,
    CENTENARIAN_CATEGORY,
]

# Highest threshold first
AGE_TIERS = [
    (100, CENTENARIAN_CATEGORY),
    (90, NONAGENARIAN_CATEGORY),
    (80, OCTOGENARIAN_CATEGORY),
]


# =============================================================================
# AGE TIERS
# =============================================================================

def parse_age(value):
    """
    Convert a stored age (string, int or None) to an int

    Blank or non-numeric values count as 0.
    """
    if value is None or value == '':
        return 0
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def determine_category_by_age(age):
    """
    Age-tier category name for an age

    Examples:
        >>> determine_category_by_age(79)
        'Regular senior citizens'
        >>> determine_category_by_age(90)
        'Nonagenarian (90-99)'
    """
    age = parse_age(age)
    for threshold, category_name in AGE_TIERS:
        if age >= threshold:
            return category_name
    return REGULAR_CATEGORY


def resolve_category_id(category_name, category_lookup):
    """
    Look up a category id by name

    Raises:
        ConfigurationError: If the lookup has no row for the name
    """
    try:
        return category_lookup[category_name]
    except KeyError:
        raise ConfigurationError(
            f"Senior category '{category_name}' not found. "
            f"Run 'manage.py seed_lookups' to create the category table."
        ) from None


def get_updated_category_if_changed(old_age, new_age, category_lookup):
    """
    Return the new category id if the age tier changed, otherwise None

    Args:
        old_age: Age before the update
        new_age: Age after the update
        category_lookup: Mapping of category name to id

    Returns:
        Category id of the new tier, or None when both ages share a tier
    """
    old_category = determine_category_by_age(old_age)
    new_category = determine_category_by_age(new_age)

    if old_category == new_category:
        return None

    return resolve_category_id(new_category, category_lookup)


def initial_category_name(age, pwd):
    """Category for a brand-new application"""
    if pwd:
        return SPECIAL_ASSISTANCE_CATEGORY
    return determine_category_by_age(age)


# =============================================================================
# RECONCILIATION RULES
# =============================================================================

class CategoryChange:
    """Before/after snapshot of the senior fields the rules look at"""

    def __init__(self, old_age, new_age, old_pwd=False, new_pwd=False):
        self.old_age = parse_age(old_age)
        self.new_age = parse_age(new_age)
        self.old_pwd = bool(old_pwd)
        self.new_pwd = bool(new_pwd)

    @property
    def pwd_changed(self):
        return self.old_pwd != self.new_pwd

    @property
    def age_tier_changed(self):
        return determine_category_by_age(self.old_age) != determine_category_by_age(self.new_age)

    def __repr__(self):
        return (
            f"CategoryChange(age {self.old_age}->{self.new_age}, "
            f"pwd {self.old_pwd}->{self.new_pwd})"
        )


class CategoryRule:
    """A rule returns a category name when it fires, None otherwise"""

    name = None

    def evaluate(self, change):
        raise NotImplementedError


class PwdRule(CategoryRule):
    """Seniors leaving PWD go back to their age tier, same as a new application"""

    name = 'pwd'

    def evaluate(self, change):
        if not change.pwd_changed:
            return None
        return initial_category_name(change.new_age, change.new_pwd)


class AgeTierRule(CategoryRule):
    """PWD seniors stay in Special assistance cases whatever their age"""

    name = 'age_tier'

    def evaluate(self, change):
        if not change.age_tier_changed or change.new_pwd:
            return None
        return determine_category_by_age(change.new_age)


RULE_REGISTRY = {
    PwdRule.name: PwdRule,
    AgeTierRule.name: AgeTierRule,
}


class CategoryReconciler:
    """
    Evaluates category rules in priority order

    Usage:
        reconciler = CategoryReconciler()                 # order from settings
        reconciler = CategoryReconciler(['age_tier', 'pwd'])
        category_id = reconciler.resolve(change, lookup)  # None = leave as is
    """

    def __init__(self, rule_order=None):
        if rule_order is None:
            rule_order = welfare_settings.CATEGORY_RULE_ORDER

        if len(set(rule_order)) != len(rule_order):
            raise ConfigurationError(f"Duplicate category rule in order: {rule_order}")

        self.rules = []
        for rule_name in rule_order:
            rule_class = RULE_REGISTRY.get(rule_name)
            if rule_class is None:
                raise ConfigurationError(
                    f"Unknown category rule '{rule_name}'. "
                    f"Valid rules: {', '.join(sorted(RULE_REGISTRY))}"
                )
            self.rules.append(rule_class())

    @property
    def rule_order(self):
        return [rule.name for rule in self.rules]

    def resolve_category_name(self, change):
        """Name chosen by the first rule that fires, or None"""
        for rule in self.rules:
            category_name = rule.evaluate(change)
            if category_name is not None:
                logger.debug(f"Category rule '{rule.name}' fired for {change!r}: {category_name}")
                return category_name
        return None

    def resolve(self, change, category_lookup):
        """
        Category id the senior's applications must move to, or None

        Raises:
            ConfigurationError: If the chosen category is missing from the lookup
        """
        category_name = self.resolve_category_name(change)
        if category_name is None:
            return None
        return resolve_category_id(category_name, category_lookup)
