"""
Augmentor 动作流引擎

为注入到第三方页面的元素附加声明式动作流，并在严格预算下执行。
"""

__version__ = "1.0.0"
