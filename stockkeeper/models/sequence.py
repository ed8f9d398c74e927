"""
SequenceCounter model — last issued reference number per (prefix, day).
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class SequenceCounter(models.Model):
    """
    Counter row for one (prefix, date) pair.

    The row is the sole source of truth for the next sequence: it is
    locked with select_for_update() while a number is allocated, so two
    concurrent callers can never mint the same reference number. Never
    derive the next value from max() over issued documents.
    """

    prefix = models.CharField(max_length=3, verbose_name=_('Prefix'))
    date_key = models.CharField(
        max_length=8,
        verbose_name=_('Date'),
        help_text=_('YYYYMMDD'),
    )
    last_value = models.PositiveIntegerField(default=0, verbose_name=_('Last issued'))

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Sequence counter')
        verbose_name_plural = _('Sequence counters')
        ordering = ['-date_key', 'prefix']
        constraints = [
            models.UniqueConstraint(
                fields=['prefix', 'date_key'],
                name='unique_sequence_counter_prefix_date',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.prefix}-{self.date_key}: {self.last_value}"
