"""
Fire Risk Neural Demonstrator

Maps temperature, precipitation, wind speed and humidity to a 0-100 fire
risk score through a small fixed-weight network, lays the network out as
a diagram and keeps a short risk history for trend charts.
"""
__version__ = "0.1.0"
