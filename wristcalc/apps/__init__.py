# Apps Module
from .calculator import CalculatorApp
