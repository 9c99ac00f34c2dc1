from .fund_forms import (
    DateRangeForm,
    FundHistoryFilterForm,
    FundHistoryForm,
    GovernmentFundForm,
    TransactionFilterForm,
    TransactionForm,
)

from .senior_forms import (
    SeniorForm,
    SeniorUpdateForm,
    SeniorSearchForm,
    SeniorReleaseForm,
)

from .application_forms import (
    ApplicationForm,
    ApplicationStatusForm,
    ApplicationSearchForm,
)


__all__ = [
    # Fund Forms
    "DateRangeForm",
    "FundHistoryFilterForm",
    "FundHistoryForm",
    "GovernmentFundForm",
    "TransactionFilterForm",
    "TransactionForm",
    # Senior Forms
    "SeniorForm",
    "SeniorUpdateForm",
    "SeniorSearchForm",
    "SeniorReleaseForm",
    # Application Forms
    "ApplicationForm",
    "ApplicationStatusForm",
    "ApplicationSearchForm",
]
