from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class StockkeeperAdminUnfoldConfig(AppConfig):
    name = "stockkeeper.contrib.admin_unfold"
    label = "stockkeeper_admin_unfold"
    verbose_name = _("Stock Keeping (Unfold admin)")
