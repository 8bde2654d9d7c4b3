from pnltracker.models.enums import TxType, Bucket, PeriodKind, Delta, ClientStatus

from pnltracker.models.finance import FinanceTransaction, LeadGeneration
from pnltracker.models.staff import DepartmentBonusPoints, PayrollRecord
