import os
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self):
        self.API_PREFIX = os.getenv('API_PREFIX', '/blackrock/challenge/v1')
        self.NPS_RATE = Decimal(os.getenv('NPS_RATE', '0.0711'))
        self.INDEX_RATE = Decimal(os.getenv('INDEX_RATE', '0.1449'))
        self.RETIREMENT_AGE = int(os.getenv('RETIREMENT_AGE', '60'))
        self.MINIMUM_INVESTMENT_YEARS = int(os.getenv('MINIMUM_INVESTMENT_YEARS', '5'))
        self.MAX_TRANSACTION_AMOUNT = Decimal(os.getenv('MAX_TRANSACTION_AMOUNT', '500000'))
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


settings = Settings()
