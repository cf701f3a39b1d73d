from pos_finder.models.point_of_sale import PointOfSale
from pos_finder.models.opening_hours import OpeningHours
from pos_finder.models.job_runs import JobRun

__all__ = ["PointOfSale", "OpeningHours", "JobRun"]
