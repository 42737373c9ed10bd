"""Personal finance tracker."""
