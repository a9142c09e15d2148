"""
Alarmsync - keeps CloudWatch alarms in step with the SQS queues they watch.

The package plans alarm creation/deletion from the live queue and alarm
inventories (``alarmsync analyze``) and applies a saved plan
(``alarmsync deploy``).
"""

__version__ = "0.1.0"
__author__ = "Alarmsync"
