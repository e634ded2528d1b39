"""stock_checker.api: FastAPI front end for the market data gateways."""
