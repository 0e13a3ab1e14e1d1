"""
Base Module - Abstract base class for gridmission modules

This module provides the foundation for planner modules with:
- Standardized async execution interface
- Error handling and timing
- Parameter validation hook
- Result standardization
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from gridmission.exceptions import ConfigurationError
from gridmission.models.mission import MissionPlan, SurveyConfig
from gridmission.utils.logger import get_logger

@dataclass
class ModuleResult:
    """Result object returned by module execution"""
    step_name: str
    module_name: str
    implementation: str
    success: bool
    execution_time: float
    plan: Optional[MissionPlan] = None
    error_message: Optional[str] = None
    errors: Optional[List[str]] = None
    warnings: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format"""
        return {
            "step_name": self.step_name,
            "module_name": self.module_name,
            "implementation": self.implementation,
            "success": self.success,
            "execution_time": self.execution_time,
            "plan": self.plan.to_dict() if self.plan else None,
            "error_message": self.error_message,
            "errors": self.errors,
            "warnings": self.warnings
        }

class BaseModule(ABC):
    """Abstract base class for gridmission modules"""

    def __init__(self, module_name: str, implementation: str):
        self.module_name = module_name
        self.implementation = implementation
        self.logger = get_logger(f"{module_name}.{implementation}")

    async def execute(self, config: SurveyConfig) -> ModuleResult:
        """Execute module with error handling and timing"""

        start_time = datetime.now()
        warnings: List[str] = []
        errors: List[str] = []

        try:
            self.logger.info(f"Starting {self.module_name}.{self.implementation} for '{config.name}'")

            await self._validate_parameters(config, warnings)

            plan = await self._execute_implementation(config, warnings, errors)

            execution_time = (datetime.now() - start_time).total_seconds()

            self.logger.info(f"Completed {self.module_name}.{self.implementation} in {execution_time:.2f}s")

            return ModuleResult(
                step_name=config.name,
                module_name=self.module_name,
                implementation=self.implementation,
                success=True,
                execution_time=execution_time,
                plan=plan,
                errors=errors or None,
                warnings=warnings or None
            )

        except ConfigurationError as e:
            execution_time = (datetime.now() - start_time).total_seconds()
            self.logger.error(f"Module {self.module_name}.{self.implementation} rejected configuration: {e.errors}")

            return ModuleResult(
                step_name=config.name,
                module_name=self.module_name,
                implementation=self.implementation,
                success=False,
                execution_time=execution_time,
                error_message=str(e),
                errors=e.errors,
                warnings=warnings or None
            )

        except Exception as e:
            execution_time = (datetime.now() - start_time).total_seconds()
            self.logger.error(f"Module {self.module_name}.{self.implementation} failed: {str(e)}")

            return ModuleResult(
                step_name=config.name,
                module_name=self.module_name,
                implementation=self.implementation,
                success=False,
                execution_time=execution_time,
                error_message=str(e),
                warnings=warnings or None
            )

    @abstractmethod
    async def _execute_implementation(self, config: SurveyConfig, warnings: List[str],
                                      errors: List[str]) -> MissionPlan:
        """Module-specific implementation logic - Must be implemented by subclasses"""
        pass

    @abstractmethod
    async def _validate_parameters(self, config: SurveyConfig, warnings: List[str]) -> None:
        """Validate module-specific parameters - Must be implemented by subclasses"""
        pass

    def _log_warning(self, message: str, warnings_list: Optional[List[str]] = None) -> None:
        """Helper method to log warnings"""

        self.logger.warning(message)
        if warnings_list is not None:
            warnings_list.append(message)
