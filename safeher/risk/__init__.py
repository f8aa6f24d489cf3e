from safeher.risk.engine import RiskEngine, parse_risk_from_response, remove_risk_tag

__all__ = ["RiskEngine", "parse_risk_from_response", "remove_risk_tag"]
